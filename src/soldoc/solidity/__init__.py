"""Solidity compiler AST model, loader and tree walk."""
