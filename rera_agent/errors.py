"""Exception types raised inside a target's pipeline."""


class ScraperError(Exception):
    """Base class for scraper failures."""


class ResolutionError(ScraperError):
    """The resolver returned no candidate action for an instruction."""

    def __init__(self, instruction: str):
        super().__init__(f"No action found for instruction: {instruction!r}")
        self.instruction = instruction


class StepTimeout(ScraperError):
    """A bounded wait (navigation, selector) elapsed without success."""

    def __init__(self, description: str, timeout_ms: int):
        super().__init__(f"Timed out after {timeout_ms}ms waiting for {description}")
        self.description = description
        self.timeout_ms = timeout_ms


class ExtractionShapeError(ScraperError):
    """Structured extraction returned data that does not fit its schema."""

    def __init__(self, schema_name: str, detail: str):
        super().__init__(f"Extraction for {schema_name} did not match schema: {detail}")
        self.schema_name = schema_name
        self.detail = detail


class ActionExecutionError(ScraperError):
    """A cached action could not be performed on the page."""

    def __init__(self, action, detail: str):
        super().__init__(f"Cannot execute {action.method!r} on {action.selector!r}: {detail}")
        self.action = action
        self.detail = detail
