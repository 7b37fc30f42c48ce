"""
Issuer template matching for known document senders.
"""

from .matcher import TemplateMatcher, TemplateMatch, template_confidence

__all__ = [
    "TemplateMatcher",
    "TemplateMatch",
    "template_confidence",
]
