"""
Static Catalog

Defaults used when tables are created without explicit dimensions and
when a session is initialized.
"""

from typing import Dict, List, NamedTuple

from seatplan.models.arrangement import TableShape


class ShapeDefaults(NamedTuple):
    capacity: int
    width: float
    height: float


TABLE_SHAPE_DEFAULTS: Dict[TableShape, ShapeDefaults] = {
    TableShape.ROUND: ShapeDefaults(capacity=8, width=150, height=150),
    TableShape.RECTANGLE: ShapeDefaults(capacity=10, width=200, height=100),
    TableShape.CUSTOM: ShapeDefaults(capacity=6, width=120, height=120),
}

DEFAULT_TABLE_POSITION = (100, 100)

DEFAULT_MENU_OPTIONS: List[dict] = [
    {"name": "Meat", "type": "main", "color": "#C0392B", "description": "Beef fillet with seasonal vegetables"},
    {"name": "Fish", "type": "main", "color": "#2980B9", "description": "Pan-fried salmon"},
    {"name": "Vegetarian", "type": "main", "color": "#27AE60", "description": "Risotto with wild mushrooms"},
    {"name": "Vegan", "type": "main", "color": "#8E44AD", "description": "Roasted vegetable curry"},
    {"name": "Kids Menu", "type": "kids", "color": "#F39C12", "description": "Pasta with tomato sauce"},
]

DEFAULT_OBSTACLE = {"type": "other", "x": 0, "y": 0, "width": 50, "height": 50, "rotation": 0}


def shape_defaults(shape: TableShape) -> ShapeDefaults:
    """Canonical (capacity, width, height) for a table shape."""
    return TABLE_SHAPE_DEFAULTS[TableShape(shape)]
