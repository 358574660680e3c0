import importlib

mod = "jsonlens"
class LazyLoader:
    """
    Lazy loader for the jsonlens functions to speed up startup time.
    """
    def __init__(self, mappings):
        self._modules = {}
        self._mappings = mappings

    def _load_module(self, module_name):
        if module_name not in self._modules:
            self._modules[module_name] = importlib.import_module(module_name)
        return self._modules[module_name]

    def __getattr__(self, item):
        if item.startswith('__'):
            raise AttributeError(item)
        if item in self._mappings:
            module_name, func_name = self._mappings[item]
            module = self._load_module(module_name)
            return getattr(module, func_name)
        else:
            return self._load_module(f"{mod}.{item}")

# Define the functions and their corresponding module paths
_mappings = {
    "infer_schema": (f"{mod}.schema_inference", "infer_schema"),
    "infer_schema_from_samples": (f"{mod}.schema_inference", "infer_schema_from_samples"),
    "merge_schema_nodes": (f"{mod}.schema_inference", "merge_schema_nodes"),
    "diff_json": (f"{mod}.json_diff", "diff_json"),
    "collect_filterable_fields": (f"{mod}.field_paths", "collect_filterable_fields"),
    "get_numeric_field_paths": (f"{mod}.field_paths", "get_numeric_field_paths"),
    "apply_filters": (f"{mod}.filters", "apply_filters"),
    "build_chart_data": (f"{mod}.chart_data", "build_chart_data"),
    "convert_json_to_schema": (f"{mod}.jsontoschema", "convert_json_to_schema"),
    "list_json_fields": (f"{mod}.jsontoschema", "list_json_fields"),
    "convert_json_to_diff": (f"{mod}.jsontodiff", "convert_json_to_diff"),
    "filter_json_records": (f"{mod}.jsonfilter", "filter_json_records"),
    "convert_json_to_chart": (f"{mod}.jsontochart", "convert_json_to_chart"),
}

_lazy_loader = LazyLoader(_mappings)

def __getattr__(name):
    return getattr(_lazy_loader, name)
