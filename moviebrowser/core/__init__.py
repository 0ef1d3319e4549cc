"""
Couche domaine (core).

Contient les entites metier, ports (interfaces abstraites), le type Result
et les valeurs observables. Cette couche n'a AUCUNE dependance vers
l'infrastructure (adapters, frameworks, BDD).

Sous-packages :
- entities/ : Entites metier (MediaSummary, MediaDetail, Favorite)
- ports/ : Interfaces abstraites definissant les contrats pour les adaptateurs
"""
