"""Textual interface for runedit"""
