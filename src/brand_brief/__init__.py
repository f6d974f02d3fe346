"""
Brand Brief: onboarding wizard for marketing briefs

Collects a client's branding information step by step and sends it to
Google Docs, Google Sheets and an optional PDF.
"""

try:
    from importlib.metadata import version
    __version__ = version("brand-brief")
except Exception:
    __version__ = "0.0.0"  # Fallback for development

__all__ = ["__version__"]
