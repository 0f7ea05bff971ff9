class URLCompareError(Exception):
    pass

class UrlParseFailure(URLCompareError):
    """URL could not be parsed. Converted to ParsedURL.error by the parser."""
    pass

class ConfigError(URLCompareError):
    pass

class ExportError(URLCompareError):
    """Writing comparison output failed."""
    pass
