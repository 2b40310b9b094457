def validate_positive_integer(type_: object, value: int) -> None:
    if value <= 0:
        raise ValueError("Value must be a positive integer")


def validate_non_negative_float(type_: object, value: float | None) -> None:
    if value is None:
        return

    if value < 0:
        raise ValueError("Start time must not be negative")
