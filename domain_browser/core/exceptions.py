class DomainBrowserError(Exception):
    """Base exception for all domain_browser errors"""
    pass

class ConfigError(DomainBrowserError):
    """Invalid or inconsistent global.json"""
    pass

class SourceFetchError(DomainBrowserError):
    """The spreadsheet endpoint could not be reached or returned an HTTP error"""
    pass

class SourceParseError(DomainBrowserError):
    """
    The payload does not have the expected shape:
    no JSON object inside the callback wrapper, invalid JSON,
    missing table/cols/rows, etc
    """
    pass
