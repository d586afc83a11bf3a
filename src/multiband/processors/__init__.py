from .protocols import BandProcessor, KernelProcessor, PixelProcessor

__all__ = ["BandProcessor", "KernelProcessor", "PixelProcessor"]
