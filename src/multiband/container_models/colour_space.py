from enum import StrEnum


class ColourSpace(StrEnum):
    """Advisory tag describing how the bands of an image are interpreted."""

    CUSTOM = "custom"
    LUMINANCE = "luminance"
    RGB = "rgb"
    RGBA = "rgba"
    HSV = "hsv"
    HSL = "hsl"
    CIE_LAB = "cie_lab"

    @property
    def num_bands(self) -> int | None:
        """Conventional band count, ``None`` when the space does not imply one."""
        return _NUM_BANDS.get(self)


_NUM_BANDS: dict[ColourSpace, int] = {
    ColourSpace.LUMINANCE: 1,
    ColourSpace.RGB: 3,
    ColourSpace.RGBA: 4,
    ColourSpace.HSV: 3,
    ColourSpace.HSL: 3,
    ColourSpace.CIE_LAB: 3,
}
