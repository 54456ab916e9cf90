# Copyright 2026 futspec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Sphinx configuration for the futspec manual.

The manual is a single page describing the test comment language and the
``futspec`` command line; build it with ``sphinx-build docs/sphinx <outdir>``.
"""

project = "futspec"
author = "futspec Contributors"
copyright = "2026, futspec Contributors"
version = "0.1"
release = "0.1.0"

root_doc = "index"
source_suffix = {".rst": "restructuredtext"}
exclude_patterns = ["_build"]

# Futhark snippets in the manual are shown verbatim.
highlight_language = "none"

html_theme = "alabaster"
html_title = "futspec: Futhark test specifications"
html_theme_options = {
    "description": "Parser for the test blocks in Futhark program comments",
    "fixed_sidebar": True,
}
