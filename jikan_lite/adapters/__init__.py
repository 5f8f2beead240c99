"""
Couche adaptateurs (infrastructure).

Les adaptateurs implémentent les ports définis dans core/ports/ et fournissent
des implémentations concrètes pour les systèmes externes.

Sous-packages :
- api/ : Client de l'API Jikan v4 (httpx + tenacity)
- cache/ : Backends de cache (mémoire, Redis, disque)
- cli/ : Interface ligne de commande (Typer)

Chaque adaptateur dépend de core/ mais core/ ne dépend jamais des adaptateurs.
"""
