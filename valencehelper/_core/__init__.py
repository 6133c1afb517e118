"""Transport and request logging shared by the facade."""
