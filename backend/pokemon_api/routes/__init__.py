"""
Pokemon API — API Routes Package
==================================

Route Inventory:
    - pokemon.py:  /pokemon and /pokemon/nombre/{name} (CRUD on both identifier axes)
    - health.py:   GET /health

Routes stay thin: extract parameters, call PokemonService, return the
response model. Status codes for failures come from the global exception
handlers in main.py.
"""
