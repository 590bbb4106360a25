import cattrs

converter = cattrs.Converter()
converter.register_unstructure_hook(int, str)
converter.register_unstructure_hook(float, repr)
converter.register_unstructure_hook(bool, lambda b: "true" if b else "false")


def to_str(value: str | int | float | bool) -> str:
    """Convert a property value to its textual INI form."""

    return str(converter.unstructure(value))
