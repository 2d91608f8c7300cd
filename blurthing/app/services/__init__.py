# blurthing/app/services/__init__.py
