"""Puts the repository root on sys.path so tests import ``armik`` without installing."""
