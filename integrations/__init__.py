"""
Participle Atlas - Corpus Integrations

Readers for tagged Hebrew Bible corpora:
- BHSA JSON: chapter-per-file export of the BHSA feature set
"""
from integrations.base import BaseCorpusIntegration
from integrations.bhsa_json import BhsaJsonCorpus

__all__ = [
    "BaseCorpusIntegration",
    "BhsaJsonCorpus",
]
