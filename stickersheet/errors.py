class StickerSheetError(Exception):
    """Base class for errors raised by the sticker sheet segmenter."""


class SurfaceError(StickerSheetError):
    """The input could not be turned into a writable RGBA pixel surface."""
