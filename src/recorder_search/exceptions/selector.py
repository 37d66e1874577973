"""
Selector-related exceptions.

Raised by the selector engine, the locator parser and the aria template
parser. The search pipeline converts every one of them into an empty
result, so none of these reach the recorder UI.
"""

from recorder_search.exceptions.base import RecorderSearchError


class SelectorError(RecorderSearchError):
    """Base exception for selector errors."""
    
    def __init__(self, message: str, selector: str):
        super().__init__(message, {"selector": selector})
        self.selector = selector


class SelectorParseError(SelectorError):
    """
    Selector text could not be parsed.
    
    Raised for unknown engines, malformed role/text values and CSS or
    XPath expressions that fail to compile.
    """
    pass


class SelectorEvaluationError(SelectorError):
    """
    A parsed selector failed while being evaluated against a document.
    """
    pass


class LocatorSyntaxError(SelectorError):
    """
    Locator call chain could not be converted to a selector.
    
    Raised for text that looks like a locator (``getByRole(...)``,
    ``page.get_by_text(...)``) but has unbalanced quotes or parentheses,
    unknown methods or missing arguments.
    """
    pass


class AriaTemplateError(RecorderSearchError):
    """
    Aria template text is not a valid template.
    """
    
    def __init__(self, message: str, template: str):
        super().__init__(message, {"template": template})
        self.template = template
