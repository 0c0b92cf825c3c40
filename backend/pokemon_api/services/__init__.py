"""
Pokemon API — Services Layer
==============================

Service Inventory:
    - PokemonService: the eight resource handlers (list, get, create, update
      and delete on the id and name axes), independent of HTTP and of the
      record store backend.
"""
