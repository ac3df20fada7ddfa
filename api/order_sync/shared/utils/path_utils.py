"""
Acceso seguro por ruta a estructuras anidadas (dicts/listas de JSON).

Funcion pura y sin I/O: se usa en el normalizador de pedidos para leer
ramas que pueden faltar a cualquier profundidad.
"""
from __future__ import annotations

from typing import Any, Mapping, Sequence


def get_path(tree: Any, path: str, default: Any = None) -> Any:
    """
    Recorre ``tree`` siguiendo una ruta separada por puntos.

    - Las claves se buscan en mappings.
    - Los segmentos numericos indexan listas/tuplas ("items.0.name").
    - Si cualquier segmento falta (o el valor intermedio es None), retorna
      ``default`` en vez de lanzar una excepcion.
    - Un valor final None tambien se reemplaza por ``default``.

    Ejemplo:
        get_path({"a": [{"b": 1}]}, "a.0.b") -> 1
        get_path({}, "a.0.b", "x")           -> "x"
    """
    if not path:
        return default if tree is None else tree

    current = tree
    for segment in path.split("."):
        if current is None:
            return default
        if isinstance(current, Mapping):
            if segment not in current:
                return default
            current = current[segment]
        elif isinstance(current, Sequence) and not isinstance(current, (str, bytes)):
            if not segment.isdigit():
                return default
            index = int(segment)
            if index >= len(current):
                return default
            current = current[index]
        else:
            return default

    return default if current is None else current
