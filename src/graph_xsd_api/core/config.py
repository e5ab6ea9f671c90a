#!/usr/bin/env python3
"""
Configuration settings for XSD generation and serialization.

Every value can be overridden via environment variables.
"""

import logging

from .env_utils import getenv_bool, getenv_clean, getenv_int

logger = logging.getLogger(__name__)

DEFAULT_EMAIL_PATTERN = ".+@.+"


class XsdConfig:
    """XSD output configuration.

    Values are read when the instance is created, so a new instance picks up
    changed environment variables.
    """

    def __init__(self):
        # Spaces per nesting level in generated documents (0 = single line)
        self.INDENT = max(getenv_int("XSD_INDENT", 2), 0)

        # Prefix documents with <?xml ...?>
        self.XML_DECLARATION = getenv_bool("XSD_XML_DECLARATION", True)

        # Pattern facet applied to Text ranges with format Email
        self.EMAIL_PATTERN = getenv_clean("XSD_EMAIL_PATTERN", DEFAULT_EMAIL_PATTERN) or DEFAULT_EMAIL_PATTERN

    def serializer_kwargs(self) -> dict:
        """Keyword arguments for serialize_schema / generate_xsd."""
        return {"indent": self.INDENT, "xml_declaration": self.XML_DECLARATION}


# Singleton instance
xsd_config = XsdConfig()
