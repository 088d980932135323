"""
Per-translation bookkeeping.

The registry maps Honeybee identifiers to what was built for them so that
later stages can resolve references without walking the OpenStudio model.
A fresh ``TranslationContext`` is created for every translation call.
"""
import logging
from dataclasses import dataclass

from openstudio import model as osmod

from .errors import DuplicateRegistrationError

logger = logging.getLogger(__name__)

# categories holding the OpenStudio objects created from the document
SCHEDULE_TYPE_LIMIT = 'schedule_type_limit'
SCHEDULE = 'schedule'
MATERIAL = 'material'
CONSTRUCTION = 'construction'
CONSTRUCTION_SET = 'construction_set'
PROGRAM_TYPE = 'program_type'
THERMAL_ZONE = 'thermal_zone'

# categories holding records needed by later stages
GAS_GAP = 'gas_gap'
AIR_BOUNDARY = 'air_boundary'
AIR_BOUNDARY_SET = 'air_boundary_set'
WINDOW_SHADE = 'window_shade'
PROGRAM_SETPOINT = 'program_setpoint'
INTERIOR_AFN_SURFACE = 'interior_afn_surface'

CATEGORIES = (SCHEDULE_TYPE_LIMIT, SCHEDULE, MATERIAL, CONSTRUCTION, CONSTRUCTION_SET, PROGRAM_TYPE, THERMAL_ZONE,
              GAS_GAP, AIR_BOUNDARY, AIR_BOUNDARY_SET, WINDOW_SHADE, PROGRAM_SETPOINT, INTERIOR_AFN_SURFACE)

# OpenStudio by-name accessors tried, in order, when an identifier is not registered
MODEL_GETTERS = {
    SCHEDULE_TYPE_LIMIT: ('getScheduleTypeLimitsByName',),
    SCHEDULE: ('getScheduleByName',),
    MATERIAL: ('getMaterialByName',),
    CONSTRUCTION: ('getConstructionByName', 'getConstructionAirBoundaryByName'),
    CONSTRUCTION_SET: ('getDefaultConstructionSetByName',),
    PROGRAM_TYPE: ('getSpaceTypeByName',),
    THERMAL_ZONE: ('getThermalZoneByName',),
}


class IdentifierRegistry:
    def __init__(self):
        self._entries = {category: {} for category in CATEGORIES}

    def _category(self, category: str) -> dict:
        try:
            return self._entries[category]
        except KeyError:
            raise ValueError(f'Unknown registry category: {category}') from None

    def register(self, category: str, identifier: str, obj, check_existing: bool = False):
        """
        Register an object under an identifier.

        Parameters
        ----------
        category : str
            one of the registry categories.

        identifier : str
            the Honeybee identifier.

        obj : object
            the created OpenStudio object or the source record.

        check_existing : bool, optional
            if True, refuse to replace an existing entry. Otherwise the last registration wins.
        """
        entries = self._category(category)
        if check_existing and identifier in entries:
            raise DuplicateRegistrationError(category, identifier)
        entries[identifier] = obj

    def lookup(self, category: str, identifier: str):
        return self._category(category).get(identifier)

    def contains(self, category: str, identifier: str) -> bool:
        return identifier in self._category(category)

    def identifiers(self, category: str) -> list[str]:
        return list(self._category(category).keys())

    def is_empty(self, category: str) -> bool:
        return len(self._category(category)) == 0


@dataclass
class AirMixing:
    """Zone mixing to create once every room exists."""
    zone_id: str
    flow_rate: float
    schedule_id: str = None
    source_zone_id: str = None


class TranslationContext:
    """Everything one translation call shares between its stages."""

    def __init__(self, openstudio_model: osmod.Model, log_report: bool = True):
        self.openstudio_model = openstudio_model
        self.log_report = log_report
        self.registry = IdentifierRegistry()
        self.air_mixing = []
        self.errors = []
        self.warnings = []
        # airflow network state, set by the ventilation simulation control
        self.use_simple_vent = True
        self.afn_reference_crack = None

    def add_warning(self, message: str):
        self.warnings.append(message)
        logger.warning(message)

    def find_in_model(self, category: str, identifier: str):
        """Look up an object by name in the OpenStudio model. Returns None if absent."""
        for getter_name in MODEL_GETTERS.get(category, ()):
            os_obj = getattr(self.openstudio_model, getter_name)(identifier)
            if os_obj.empty() == False:
                return os_obj.get()
        return None

    def exists(self, category: str, identifier: str) -> bool:
        if self.registry.contains(category, identifier):
            return True
        return self.find_in_model(category, identifier) is not None

    def get_object(self, category: str, identifier: str, referrer: str = None):
        """
        Resolve an identifier to an OpenStudio object, registry first then the model.

        Parameters
        ----------
        category : str
            the registry category to search.

        identifier : str
            the identifier to resolve. None resolves to None without a warning.

        referrer : str, optional
            identifier of the object holding the reference, used in the warning.

        Returns
        -------
        object
            the OpenStudio object or None if it cannot be found.
        """
        if identifier is None:
            return None
        os_obj = self.registry.lookup(category, identifier)
        if os_obj is None:
            os_obj = self.find_in_model(category, identifier)
        if os_obj is None:
            category_name = category.replace('_', ' ')
            if referrer is not None:
                self.add_warning(f"Could not find {category_name} '{identifier}' referenced by '{referrer}'.")
            else:
                self.add_warning(f"Could not find {category_name} '{identifier}'.")
        return os_obj

    def schedule(self, identifier: str, referrer: str = None):
        return self.get_object(SCHEDULE, identifier, referrer)

    def material(self, identifier: str, referrer: str = None):
        return self.get_object(MATERIAL, identifier, referrer)

    def construction(self, identifier: str, referrer: str = None):
        return self.get_object(CONSTRUCTION, identifier, referrer)

    def thermal_zone(self, identifier: str, referrer: str = None):
        return self.get_object(THERMAL_ZONE, identifier, referrer)
