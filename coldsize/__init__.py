"""ColdSize — refrigeration heat-load sizing for cold rooms, freezer rooms and blast freezers."""

__app_name__ = "coldsize"
__version__ = "0.3.0"
