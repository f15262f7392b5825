"""Interactive bounding box annotation in the normalized YOLO label format."""
