from .http_transformation_client import TransformationClient

__all__ = ["TransformationClient"]
