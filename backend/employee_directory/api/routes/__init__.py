"""Route Modules — one file per resource/concern, each with its own APIRouter prefix and tags."""
