"""Runtime values produced by evaluation. There are only two kinds: integers and strings."""

from dataclasses import dataclass


class Value:
    """Superclass of every runtime value."""


@dataclass(frozen=True)
class IntValue(Value):
    value: int

    def __str__(self):
        return render(self)


@dataclass(frozen=True)
class StringValue(Value):
    text: str

    def __str__(self):
        return render(self)


def render(value):
    """Returns the printed form of value: signed decimal for integers, double-quoted text (unescaped) for strings."""
    if isinstance(value, IntValue):
        return str(value.value)
    if isinstance(value, StringValue):
        return f'"{value.text}"'
    raise TypeError(f"cannot render {value!r}")
