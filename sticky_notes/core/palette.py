from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PaletteColor:
    name: str
    token: str


PALETTE: tuple[PaletteColor, ...] = (
    PaletteColor("yellow", "#fff475"),
    PaletteColor("orange", "#fbbc04"),
    PaletteColor("red", "#f28b82"),
    PaletteColor("green", "#ccff90"),
    PaletteColor("teal", "#a7ffeb"),
    PaletteColor("blue", "#aecbfa"),
    PaletteColor("purple", "#d7aefb"),
    PaletteColor("pink", "#fdcfe8"),
)
