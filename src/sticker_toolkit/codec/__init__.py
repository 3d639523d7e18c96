"""
Module: codec

Purpose:
    Encoded image <-> RasterImage conversion at the edges of the toolkit.
"""

from .image_codec import decode, encode, decode_data_url, encode_data_url

__all__ = [
    "decode",
    "encode",
    "decode_data_url",
    "encode_data_url",
]
