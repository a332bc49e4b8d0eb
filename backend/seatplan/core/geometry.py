"""
Geometry Utilities

Shapely-based functions for the layout fields of an arrangement:
- Converting tables and obstacles to footprint polygons
- Placing seat anchors around a table outline
- Checking whether an element lies inside its room canvas

Collision between elements is deliberately not computed here.
"""

from typing import List, Tuple, Union
from shapely.geometry import Polygon, Point, box
from shapely import affinity

from seatplan.models.arrangement import Obstacle, Room, Table, TableShape


def rect_to_polygon(x: float, y: float, width: float, height: float, rotation: float = 0) -> Polygon:
    """
    Convert a top-left rectangle to a Shapely Polygon, rotated about its centre.

    Example:
        >>> rect_to_polygon(10, 10, 100, 50).bounds
        (10.0, 10.0, 110.0, 60.0)
    """
    poly = box(x, y, x + width, y + height)
    if rotation:
        poly = affinity.rotate(poly, rotation, origin="center")
    return poly


def table_footprint(table: Table) -> Polygon:
    """
    Outline of a table in room coordinates.

    Round tables are ellipses inscribed in their bounding box; rectangle
    and custom tables use the bounding box itself.
    """
    if table.shape == TableShape.ROUND:
        cx = table.x + table.width / 2
        cy = table.y + table.height / 2
        poly = affinity.scale(Point(cx, cy).buffer(1.0), table.width / 2, table.height / 2)
        if table.rotation:
            poly = affinity.rotate(poly, table.rotation, origin=(cx, cy))
        return poly
    return rect_to_polygon(table.x, table.y, table.width, table.height, table.rotation)


def obstacle_footprint(obstacle: Obstacle) -> Polygon:
    """Outline of an obstacle in room coordinates."""
    return rect_to_polygon(obstacle.x, obstacle.y, obstacle.width, obstacle.height, obstacle.rotation)


def seat_anchors(table: Table, count: int, offset: float = 20.0) -> List[Tuple[float, float]]:
    """
    Evenly spaced seat points around a table.

    The points lie on the table outline pushed outwards by `offset`,
    starting at the outline's first vertex and walking its perimeter.

    Args:
        table: Table to seat around
        count: Number of seats to place
        offset: Distance between table edge and seat centre

    Returns:
        List of (x, y) tuples, one per seat position
    """
    if count <= 0:
        return []
    ring = table_footprint(table).buffer(offset).exterior
    anchors = []
    for i in range(count):
        point = ring.interpolate(i / count, normalized=True)
        anchors.append((round(point.x, 2), round(point.y, 2)))
    return anchors


def is_within_room(element: Union[Table, Obstacle, Polygon], room: Room) -> bool:
    """
    Check if an element is fully within the room canvas.

    Returns:
        True if the element's footprint lies inside (or on the edge of) the room
    """
    if isinstance(element, Table):
        poly = table_footprint(element)
    elif isinstance(element, Obstacle):
        poly = obstacle_footprint(element)
    else:
        poly = element
    return box(0, 0, room.width, room.height).covers(poly)
