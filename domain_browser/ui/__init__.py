"""
Dash UI adapters: layout builders and callback registration
"""
