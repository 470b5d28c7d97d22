"""Modelos y entidades del dominio.

- Entidades tal como las devuelve el backend (Pydantic v2).
- Formularios con la validación que se hace antes de enviar nada.
- El dominio no conoce HTTP ni la CLI.
"""
