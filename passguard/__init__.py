# passguard/__init__.py
"""Passguard - Password Policy & Strength Engine"""
__version__ = "1.0.0"
