"""Sentence grammars and per-sentence parsers."""
