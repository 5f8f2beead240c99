"""
Objets valeur immutables representant des concepts du domaine sans identite.

Exports :
- QueryOptions : Options de lecture (pagination, tri, filtres, recherche)
"""

from jikan_lite.core.value_objects.query_options import QueryOptions

__all__ = ["QueryOptions"]
