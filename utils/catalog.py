"""
Econ Data Explorer — Variable Catalog
Indexes the per-source variable tables from config by code, once, at import time.
"""
import config
from utils.models import SOURCE_IDS, VariableDescriptor


class VariableCatalog:
    """
    The variables one source offers, grouped by category.

    `index` maps code -> VariableDescriptor so adapters never scan the
    category tables to resolve a code.
    """

    def __init__(self, source_id: str, variables: dict):
        if source_id not in SOURCE_IDS:
            raise ValueError(f"Unknown source '{source_id}'")
        self.source_id = source_id
        self.index: dict[str, VariableDescriptor] = {}
        self._categories: dict[str, list[VariableDescriptor]] = {}

        for category, entries in variables.items():
            for name, code in entries.items():
                if code in self.index:
                    raise ValueError(
                        f"Duplicate {source_id} variable code {code} "
                        f"('{self.index[code].name}' and '{name}')"
                    )
                descriptor = VariableDescriptor(code, name, category, source_id)
                self.index[code] = descriptor
                self._categories.setdefault(category, []).append(descriptor)

    def __contains__(self, code: str) -> bool:
        return code in self.index

    def __len__(self) -> int:
        return len(self.index)

    def lookup(self, code: str) -> VariableDescriptor | None:
        return self.index.get(code)

    def describe(self, code: str) -> VariableDescriptor:
        """Descriptor for a code, or an "Other" placeholder named after the code."""
        descriptor = self.index.get(code)
        if descriptor is None:
            return VariableDescriptor(code, code, "Other", self.source_id)
        return descriptor

    def name_of(self, code: str) -> str:
        return self.describe(code).name

    def categories(self) -> list[str]:
        return list(self._categories)

    def variables_in(self, category: str) -> list[VariableDescriptor]:
        return list(self._categories.get(category, []))

    def search(self, term: str) -> list[VariableDescriptor]:
        """Case-insensitive substring match on variable names."""
        if not term:
            return list(self.index.values())
        term = term.lower()
        return [d for d in self.index.values() if term in d.name.lower()]


CATALOGS = {
    "census": VariableCatalog("census", config.CENSUS_VARIABLES),
    "fred": VariableCatalog("fred", config.FRED_VARIABLES),
    "hud": VariableCatalog("hud", config.HUD_VARIABLES),
}


def get_catalog(source_id: str) -> VariableCatalog:
    try:
        return CATALOGS[source_id]
    except KeyError:
        raise ValueError(f"Unknown source '{source_id}'") from None


def variable_names(codes: list[str], source_id: str | None = None) -> dict[str, str]:
    """Map codes to display names, searching every catalog when no source is given."""
    catalogs = [get_catalog(source_id)] if source_id else list(CATALOGS.values())
    names = {}
    for code in codes:
        names[code] = code
        for catalog in catalogs:
            descriptor = catalog.lookup(code)
            if descriptor is not None:
                names[code] = descriptor.name
                break
    return names
