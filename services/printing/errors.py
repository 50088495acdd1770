"""Typed failures raised while rendering a flyer."""


class FlyerRenderError(Exception):
    """Base exception for flyer rendering errors."""
    pass


class InvalidImageDimensions(FlyerRenderError, ValueError):
    """Image fit requested with zero or negative natural dimensions."""
    def __init__(self, width, height):
        self.width = width
        self.height = height
        self.message = f"Invalid image dimensions: {width}x{height}"
        super().__init__(self.message)


class ImageDecodeFailure(FlyerRenderError):
    """Raw image bytes could not be decoded. Recovered by the image block."""
    pass


class SerializationFailure(FlyerRenderError):
    """Finalizing the PDF buffer failed. Fatal to the whole render."""
    pass
