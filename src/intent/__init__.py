"""Instruction routing.

The intent layer converts an English natural-language instruction into an `Intent` plus a strict,
typed payload, using an ordered table of pattern rules. No models and no I/O are involved.
"""
