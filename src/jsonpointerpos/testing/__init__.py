from __future__ import annotations

from .corpus import CorpusCase, generate_corpus_files, generate_json_cases, value_at

__all__ = ["CorpusCase", "generate_corpus_files", "generate_json_cases", "value_at"]
