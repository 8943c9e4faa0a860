"""Annotation file readers."""
