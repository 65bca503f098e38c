"""Decoders for SRv6, SR Policy and BGP-LS TE Policy TLVs."""

__version__ = "0.1.0"