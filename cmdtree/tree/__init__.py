"""Command tree engine.

This package provides:
- slots: Extra argument slots and their consumption
- gate: Sender kind and permission gating
- node: The command node and its Draft/Final lifecycle
- finalizer: Derivation of display strings when a node is finalized
- dispatcher: Recursive execution walk
- completer: Recursive tab-completion walk
"""
