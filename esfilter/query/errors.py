class FilterQueryError(ValueError):
    """Base class for errors raised while compiling a filter query."""


class UnknownSelectionError(FilterQueryError):
    """Raised when a filter declares a selection kind the compiler can't build."""

    def __init__(self, selection: str):
        self.selection = selection
        super().__init__(f"Unknown Selection: {selection}")


class ValueCoercionError(FilterQueryError):
    """Raised when a value doesn't match the filter's date/time layout."""

    def __init__(self, value: str, layout: str):
        self.value = value
        self.layout = layout
        super().__init__(f"Cannot parse {value!r} with layout {layout!r}")
