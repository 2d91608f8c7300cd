# blurthing/core/__init__.py
# -*- coding: utf-8 -*-
"""Rdzeń: snapshot parametrów, historia, pipeline korekt, adapter kodeka."""
