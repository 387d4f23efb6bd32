"""specflow: a schema-driven change workflow with a durable spec library."""

__version__ = "0.1.0"
