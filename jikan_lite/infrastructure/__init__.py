"""
Couche infrastructure de Jikan Lite.

Implementations concretes des interfaces definies dans la couche domaine :

- persistence/ : Stockage SQLite avec SQLModel (modeles, requetes, repositories)
- progress_store.py : Points de reprise de la synchronisation (fichier JSON)
"""
