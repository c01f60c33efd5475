"""Business logic services."""
from .query_service import PhotoQueryService, group_photos, OTHER_GROUP
from .photo_service import PhotoService
from .csv_service import CsvBatch, CsvLayout, parse_csv, read_csv, write_csv, template_csv, staging_images
from .view_service import ViewAssembler
from .audit_service import ConstraintAuditor
from .export_service import ExportService
from .json_import_service import JsonImportService, JsonSource, read_json_source

__all__ = [
    "PhotoQueryService",
    "group_photos",
    "OTHER_GROUP",
    "PhotoService",
    "CsvBatch",
    "CsvLayout",
    "parse_csv",
    "read_csv",
    "write_csv",
    "template_csv",
    "staging_images",
    "ViewAssembler",
    "ConstraintAuditor",
    "ExportService",
    "JsonImportService",
    "JsonSource",
    "read_json_source",
]
