"""Compiler for the wats language: lexer, parser and Bril JSON IR generator."""

__version__ = "0.1.0"