"""
Sample data loaded into the in-memory backend at startup.
"""

SEED_BUSINESSES = [
    {
        "id": 1,
        "nombre": "Mecánica Los Hermanos",
        "tipo": "mecanico",
        "estado": "vendido",
        "comprador_nombre": "Juan Pérez",
        "comprador_id": 1001,
        "fecha_venta": "2024-01-15T10:30:00Z",
        "monto": 150000,
        "fecha_creacion": "2024-01-01T08:00:00Z",
    },
    {
        "id": 2,
        "nombre": "Restaurante El Sabor",
        "tipo": "comida",
        "estado": "disponible",
        "monto": 200000,
        "fecha_creacion": "2024-01-02T09:15:00Z",
    },
    {
        "id": 3,
        "nombre": "TechStore Premium",
        "tipo": "telefonos",
        "estado": "vendido",
        "comprador_nombre": "María González",
        "comprador_id": 1002,
        "fecha_venta": "2024-01-20T14:45:00Z",
        "monto": 180000,
        "fecha_creacion": "2024-01-03T11:30:00Z",
    },
]

SEED_ITEMS = [
    {
        "id": 1,
        "nombre": "Hamburguesa Clásica",
        "negocio_id": 2,
        "tipo": "comestible",
        "vencimiento_horas": 24,
        "imagen": "https://images.pexels.com/photos/1639557/pexels-photo-1639557.jpeg?auto=compress&cs=tinysrgb&w=400",
        "fecha_creacion": "2024-01-02T10:00:00Z",
        "label": "Hamburguesa Clásica",
        "weight": 115,
        "stack": True,
        "close": False,
        "degrade": 30,
        "decay": False,
        "description": "Deliciosa hamburguesa del restaurante",
        "original_id": "hamburguesa_clasica",
    },
    {
        "id": 2,
        "nombre": "Smartphone Pro",
        "negocio_id": 3,
        "tipo": "otros",
        "imagen": "https://images.pexels.com/photos/699122/pexels-photo-699122.jpeg?auto=compress&cs=tinysrgb&w=400",
        "fecha_creacion": "2024-01-03T12:00:00Z",
        "label": "Smartphone Pro",
        "weight": 200,
        "stack": False,
        "close": True,
        "degrade": 0,
        "decay": False,
        "description": "Teléfono inteligente de última generación",
        "original_id": "smartphone_pro",
    },
]
