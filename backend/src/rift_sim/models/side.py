"""Map sides."""

from enum import Enum


class Side(str, Enum):
    """Blue side drafts first; red side answers."""

    BLUE = "blue"
    RED = "red"

    @property
    def opponent(self) -> "Side":
        return Side.RED if self is Side.BLUE else Side.BLUE

    @property
    def label(self) -> str:
        return self.value.upper()
