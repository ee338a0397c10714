"""
Core functionality for the YouTube video analyzer.

This package contains the caption parsers, the fallback strategies that
acquire captions, the transcript fetcher and the LLM analyzer.
"""
