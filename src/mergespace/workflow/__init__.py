"""Analysis workflow built on pydantic_graph."""
