"""
Storefront content generation.

Modules:
    synthesizer - SEO title/description, description HTML and image alt text
"""

from .synthesizer import ContentSynthesizer, derive_alt_text, format_length

__all__ = ['ContentSynthesizer', 'derive_alt_text', 'format_length']
