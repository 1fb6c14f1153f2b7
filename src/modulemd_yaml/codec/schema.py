"""Key names of the modulemd document schema."""

from __future__ import annotations

DOCUMENT_TYPE = "modulemd"

# Root mapping
KEY_DOCUMENT = "document"
KEY_MDVERSION = "version"
KEY_DATA = "data"

# Data mapping
KEY_NAME = "name"
KEY_STREAM = "stream"
KEY_VERSION = "version"
KEY_SUMMARY = "summary"
KEY_DESCRIPTION = "description"
KEY_LICENSE = "license"
KEY_DEPENDENCIES = "dependencies"

# License mapping
KEY_LICENSE_MODULE = "module"
KEY_LICENSE_CONTENT = "content"

# Dependencies mapping
KEY_BUILDREQUIRES = "buildrequires"
KEY_REQUIRES = "requires"

ENCODING = "utf-8"
