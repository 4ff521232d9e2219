class InputError(ValueError):
    """A caller supplied a value outside its closed domain."""

    def __init__(self, field, value, message=None):
        self.field = field
        self.value = value
        super().__init__(message or f"invalid value for {field!r}: {value!r}")
