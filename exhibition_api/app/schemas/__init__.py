"""
Pydantic schema definitions for API payloads and stored records.

Each domain (users, products, enquiries, questions) defines its own
models.  ``*Create``/``*Update`` models describe request payloads;
``*Read`` models are both the stored record and the response shape.
"""
