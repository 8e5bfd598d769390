"""
Top-level package for the domain browser.

This package exposes the core architecture (dataset store, query engine,
view state) and the Dash UI adapters.
Most code should import from submodules such as:
    domain_browser.core
    domain_browser.services
    domain_browser.ui
"""

__all__: list[str] = []
