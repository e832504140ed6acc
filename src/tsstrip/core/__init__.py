"""
Core transform machinery.

Modules:
    - ``scanner``: Character cursor tracking strings, comments and brackets.
    - ``blocks``: Skipping of type-only declarations.
    - ``annotations`` / ``patterns``: Type-annotation stripping.
    - ``modules``: ES module to CommonJS rewriting.
    - ``passes`` / ``engine``: Pipeline orchestration.
"""
