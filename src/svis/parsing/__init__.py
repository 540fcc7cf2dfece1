from .mappings import decode_mappings as decode_mappings
from .parser import parse_file_by_path as parse_file_by_path
from .parser import parse_raw_source_map as parse_raw_source_map
from .parser import parse_source_map_text as parse_source_map_text
from .vlq import decode_segment as decode_segment
from .vlq import decode_values as decode_values
