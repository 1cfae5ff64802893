"""Content-Security-Policy builder with per-instance nonces."""

from cspbuilder.builder import HEADER_NAME, CspBuilder
from cspbuilder.nonce import NONCE_BYTES, WeakRandomnessError, generate_nonce
from cspbuilder.vocabulary import Directive, Source, UnknownVocabularyError

__all__ = [
    "CspBuilder",
    "Directive",
    "HEADER_NAME",
    "NONCE_BYTES",
    "Source",
    "UnknownVocabularyError",
    "WeakRandomnessError",
    "generate_nonce",
]
