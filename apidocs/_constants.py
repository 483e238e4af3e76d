"""Common literal values used across apidocs.

These constants keep template names, anchors and file patterns centralized so
the generator, renderer and tests can import the same values without
drifting. Intended for internal use within the apidocs package.

Examples
--------
>>> from apidocs import _constants
>>> _constants.TOC_ANCHOR
'table-of-contents'
>>> _constants.GO_SOURCE_GLOB
'*.go'
"""

DOCUMENT_TEMPLATE = "api_docs.md.jinja"
TOC_ANCHOR = "table-of-contents"
GO_SOURCE_GLOB = "*.go"
GO_TEST_SUFFIX = "_test.go"
