# blurthing/app/__init__.py
# -*- coding: utf-8 -*-
"""Warstwa sesji: orkiestrator, intencje, event bus i serwisy współpracujące."""
