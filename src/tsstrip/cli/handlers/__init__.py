from .convert import handle_convert, _convert_single_file, _print_batch_summary
from .classify import handle_classify

__all__ = [
  "_convert_single_file",
  "_print_batch_summary",
  "handle_classify",
  "handle_convert",
]
