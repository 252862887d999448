from __future__ import annotations

from enum import Enum


RGBA = tuple[int, int, int, int]


class Colour(Enum):
    WHITE = (255, 255, 255, 255)
    BLACK = (0, 0, 0, 255)
    GREY = (200, 200, 200, 255)
    ORANGE = (255, 146, 0, 255)
    RED = (255, 0, 0, 255)
    BLUE = (0, 0, 255, 255)
    GREEN = (0, 160, 0, 255)
    PINK = (255, 169, 208, 255)

    @property
    def rgba(self) -> RGBA:
        return self.value

    @classmethod
    def parse(cls, name: str) -> "Colour":
        try:
            return cls[name.strip().upper()]
        except KeyError:
            valid = ", ".join(member.name.title() for member in cls)
            raise ValueError(f"unknown colour {name!r}, expected one of: {valid}") from None
