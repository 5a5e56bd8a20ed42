"""Core stutter engine: settings resolution, seeding, tokenizing, chunking.

WHY: The transform and the chunk splitter are pure functions over text and
a settings record. Keeping them in one subpackage, free of file or UI code,
makes every rule testable in isolation.

HOW: settings → seed → quotes/stutter → transform, and chunker on the
finished text. See each module's docstring for its rules.
"""
