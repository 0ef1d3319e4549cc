"""
Persistance SQLite des favoris via SQLModel.

- database : engine, sessions et initialisation des tables
- models : modeles de table SQLModel
- repositories : store de favoris observable
"""
