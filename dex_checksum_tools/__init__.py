from .dex import Dex, DexFormatError

__all__ = ['Dex', 'DexFormatError']
