"""
Service layer.

Each service encapsulates the business logic for one domain and works
on the collections of the ``Storage`` it is constructed with.
``ExhibitionRegistry`` wires the services together for one store.
"""
