"""
Corpus building helpers.

Turns a folder of documents into the 3D chunk records the explorer loads.
Submodules are imported on demand: `corpus_store` is needed by the explorer
and the chunk source server, while `projection` pulls in the ML stack.
"""

__all__ = ["cli", "corpus_store", "pipeline", "projection", "text_processing"]
