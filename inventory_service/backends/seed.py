# Sample products inserted when a backend starts with an empty collection.
# The relational store gets all five; the in-memory fallback only the first three.

SAMPLE_PRODUCTS = [
    {
        "name": "Laptop Pro",
        "category": "Electronics",
        "quantity": 15,
        "price": 1299.99,
        "description": "High-performance laptop",
    },
    {
        "name": "Wireless Mouse",
        "category": "Electronics",
        "quantity": 45,
        "price": 29.99,
        "description": "Ergonomic wireless mouse",
    },
    {
        "name": "Office Chair",
        "category": "Furniture",
        "quantity": 8,
        "price": 199.99,
        "description": "Comfortable office chair",
    },
    {
        "name": "Coffee Beans",
        "category": "Food",
        "quantity": 120,
        "price": 12.99,
        "description": "Premium coffee beans",
    },
    {
        "name": "Notebook Set",
        "category": "Office Supplies",
        "quantity": 200,
        "price": 8.99,
        "description": "Pack of 3 notebooks",
    },
]

RELATIONAL_SEED = SAMPLE_PRODUCTS
MEMORY_SEED = SAMPLE_PRODUCTS[:3]
