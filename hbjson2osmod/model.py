"""
Translation of a Honeybee Model dictionary into an openstudio model.

The stages run in the order of their dependencies: every stage publishes what it builds
into the registry of the translation context and later stages resolve their references there.
"""
import enum
import json
import logging
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

import jsonschema
from openstudio import model as osmod

from . import registry
from . import resolver
from . import settings
from .construction import construction_to_openstudio
from .constructionset import construction_set_to_openstudio
from .errors import SchemaError, UnsupportedGeometryError
from .geometry import room_to_openstudio, shade_to_openstudio
from .hvac import hvac_to_openstudio
from .load import setpoint_to_openstudio_zone
from .material import material_to_openstudio
from .programtype import program_type_to_openstudio
from .registry import TranslationContext
from .schedule import schedule_to_openstudio, schedule_type_limit_to_openstudio
from .ventcool import ventilation_control_to_openstudio

logger = logging.getLogger(__name__)

class TranslationState(enum.Enum):
    IDLE = 'Idle'
    VALIDATING_TYPE = 'ValidatingType'
    BUILDING = 'Building'
    RESOLVING = 'Resolving'
    DONE = 'Done'
    FAILED = 'Failed'

@dataclass
class TranslationResult:
    openstudio_model: osmod.Model
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

@lru_cache(maxsize=None)
def load_standards() -> dict:
    """The bundled catalog of generic materials, constructions, construction sets and schedules."""
    with open(settings.STANDARDS_CATALOG_PATH) as f:
        return json.load(f)

@lru_cache(maxsize=None)
def load_schema() -> dict:
    with open(settings.MODEL_SCHEMA_PATH) as f:
        return json.load(f)

class Model:
    """
    A Honeybee Model dictionary ready to be translated to openstudio.

    Parameters
    ----------
    hash : dict
        the Honeybee Model dictionary. Its type must be 'Model'.
    """

    def __init__(self, hash: dict):
        self.state = TranslationState.VALIDATING_TYPE
        self.errors = []
        self.warnings = []
        self._hash = hash
        self._type = hash.get('type')
        if self._type is None:
            self.state = TranslationState.FAILED
            raise SchemaError('Unknown model type')
        if self._type != 'Model':
            self.state = TranslationState.FAILED
            raise SchemaError(f"Incorrect model type '{self._type}'")
        self.state = TranslationState.IDLE
        self._openstudio_model = None
        self._context = None

    @classmethod
    def read_from_disk(cls, path: str) -> 'Model':
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Cannot find {path}")
        with open(path) as f:
            return cls(json.load(f))

    @classmethod
    def from_dict(cls, data: dict) -> 'Model':
        return cls(data)

    @property
    def identifier(self) -> str:
        return self._hash.get('identifier')

    @property
    def energy_properties(self) -> dict:
        properties = self._hash.get('properties') or {}
        return properties.get('energy') or {}

    def validation_errors(self) -> list[str]:
        """
        Validate the dictionary against the bundled Model schema.

        The bundled schema is a subset of the published Honeybee Model schema. It checks the geometry
        the translation relies on (rooms, faces, sub faces, shades and boundary conditions) and the type
        and identifier of the energy objects, leaving their fields to the builders.

        Returns
        -------
        list[str]
            one message per validation error, empty if the dictionary is valid.
        """
        validator = jsonschema.Draft7Validator(load_schema())
        messages = []
        for error in sorted(validator.iter_errors(self._hash), key=lambda e: list(e.path)):
            location = '/'.join(str(p) for p in error.path)
            messages.append(f'{location}: {error.message}')
        return messages

    def is_valid(self) -> bool:
        return len(self.validation_errors()) == 0

    def to_openstudio_model(self, openstudio_model: osmod.Model = None, log_report: bool = True) -> osmod.Model:
        """
        Translate into an openstudio model. The errors and warnings of a previous translation are cleared.

        Parameters
        ----------
        openstudio_model : osmod.Model, optional
            an existing model to add the objects to. A new model is created if None.

        log_report : bool, optional
            log the progress of the translation at info level.

        Returns
        -------
        osmod.Model
            the openstudio model.
        """
        if openstudio_model is None:
            openstudio_model = osmod.Model()
        self._openstudio_model = openstudio_model
        self._context = TranslationContext(openstudio_model, log_report=log_report)
        self.errors = self._context.errors
        self.warnings = self._context.warnings

        self._report('Starting Model translation from Honeybee to OpenStudio')
        try:
            self.state = TranslationState.BUILDING
            self._create_openstudio_objects()
        except Exception as e:
            self.state = TranslationState.FAILED
            self.errors.append(str(e))
            raise
        self.state = TranslationState.DONE
        self._report('Done with Model translation!')
        return openstudio_model

    def _report(self, message: str):
        if self._context.log_report:
            logger.info(message)

    def _create_openstudio_objects(self):
        openstudio_model = self._openstudio_model
        energy = self.energy_properties

        # a standards building type lets the openstudio standards measures run on the model
        openstudio_model.getBuilding().setStandardsBuildingType(settings.STANDARDS_BUILDING_TYPE)

        vent_control = energy.get('ventilation_simulation_control')
        if vent_control is not None:
            vent_control_type = vent_control.get('vent_control_type')
            if vent_control_type is not None and vent_control_type != 'SingleZone':
                ventilation_control_to_openstudio(vent_control, openstudio_model, self._context)

        # schedules are used by all the other objects and come first
        self._report('Translating Schedules')
        self.create_schedule_type_limits(energy.get('schedule_type_limits') or [])
        self.create_schedules(energy.get('schedules') or [])
        self._report('Translating Materials')
        self.create_materials(energy.get('materials') or [])
        self._report('Translating Constructions')
        self.create_constructions(energy.get('constructions') or [])
        self._report('Translating ConstructionSets')
        self.create_construction_sets(energy.get('construction_sets') or [])
        self._report('Translating ProgramTypes')
        self.create_program_types(energy.get('program_types') or [])
        self._report('Translating Default ConstructionSet')
        self.create_default_construction_set()

        self._report('Translating Room Geometry')
        self.create_rooms()
        self._report('Translating HVAC Systems')
        self.create_hvacs()
        self._report('Translating Context Shade Geometry')
        self.create_orphaned_shades()
        self.create_orphaned_faces()
        self.create_orphaned_apertures()
        self.create_orphaned_doors()

        # zone mixing and shading controls need every zone and sub surface in the model
        self.state = TranslationState.RESOLVING
        resolver.resolve_air_mixing(self._context, openstudio_model)
        if not self._context.registry.is_empty(registry.WINDOW_SHADE):
            self._report('Translating Window Shading Control')
            resolver.resolve_shading_controls(self._context, openstudio_model)


    def _create(self, dicts: list[dict], category: str, builder, check_existing: bool = False):
        for hb_dict in dicts:
            # existing objects are kept when adding the defaults
            if check_existing and self._context.exists(category, hb_dict['identifier']):
                continue
            builder(hb_dict, self._openstudio_model, self._context)

    def create_schedule_type_limits(self, stl_dicts: list[dict], check_existing: bool = False):
        self._create(stl_dicts, registry.SCHEDULE_TYPE_LIMIT, schedule_type_limit_to_openstudio, check_existing)

    def create_schedules(self, schedule_dicts: list[dict], check_existing: bool = False):
        self._create(schedule_dicts, registry.SCHEDULE, schedule_to_openstudio, check_existing)

    def create_materials(self, material_dicts: list[dict], check_existing: bool = False):
        self._create(material_dicts, registry.MATERIAL, material_to_openstudio, check_existing)

    def create_constructions(self, construction_dicts: list[dict], check_existing: bool = False):
        self._create(construction_dicts, registry.CONSTRUCTION, construction_to_openstudio, check_existing)

    def create_construction_sets(self, construction_set_dicts: list[dict], check_existing: bool = False):
        self._create(construction_set_dicts, registry.CONSTRUCTION_SET, construction_set_to_openstudio, check_existing)

    def create_program_types(self, program_dicts: list[dict], check_existing: bool = False):
        self._create(program_dicts, registry.PROGRAM_TYPE, program_type_to_openstudio, check_existing)

    def create_default_construction_set(self):
        """
        Add the generic construction set to the building without replacing anything already in the model.
        """
        standards = load_standards()
        self.create_materials(standards['materials'], check_existing=True)
        self.create_constructions(standards['constructions'], check_existing=True)
        self.create_construction_sets(standards['construction_sets'], check_existing=True)

        # only the schedule type limit and schedule used by the generic constructions
        stls = [stl for stl in standards['schedule_type_limits'] if stl['identifier'] == settings.DEFAULT_SCHEDULE_TYPE_LIMIT]
        self.create_schedule_type_limits(stls, check_existing=True)
        schedules = [sch for sch in standards['schedules'] if sch['identifier'] == settings.DEFAULT_SCHEDULE]
        self.create_schedules(schedules, check_existing=True)

        os_construction_set = self._context.find_in_model(registry.CONSTRUCTION_SET, settings.DEFAULT_CONSTRUCTION_SET)
        if os_construction_set is not None:
            self._openstudio_model.getBuilding().setDefaultConstructionSet(os_construction_set)

    def create_rooms(self):
        for room in self._hash.get('rooms') or []:
            os_space = room_to_openstudio(room, self._openstudio_model, self._context)
            room_energy = (room.get('properties') or {}).get('energy') or {}
            program_type_id = room_energy.get('program_type')
            # rooms without their own setpoint get the one of their program type
            if program_type_id is None or room_energy.get('setpoint') is not None:
                continue
            setpoint = self._context.registry.lookup(registry.PROGRAM_SETPOINT, program_type_id)
            os_zone = os_space.thermalZone()
            if setpoint is not None and os_zone.empty() == False:
                setpoint_to_openstudio_zone(setpoint, os_zone.get(), self._openstudio_model, self._context)

    def create_hvacs(self):
        hvacs = {}
        rooms_by_hvac = {}
        for hvac in self.energy_properties.get('hvacs') or []:
            hvacs[hvac['identifier']] = hvac
            rooms_by_hvac[hvac['identifier']] = []

        for room in self._hash.get('rooms') or []:
            room_energy = (room.get('properties') or {}).get('energy') or {}
            hvac_id = room_energy.get('hvac')
            if hvac_id is None:
                continue
            if hvac_id not in rooms_by_hvac:
                self._context.add_warning(f"Could not find hvac '{hvac_id}' referenced by '{room['identifier']}'.")
                continue
            rooms_by_hvac[hvac_id].append(room['identifier'])

        for hvac_id, hvac in hvacs.items():
            hvac_to_openstudio(hvac, self._openstudio_model, rooms_by_hvac[hvac_id], self._context)

    def create_orphaned_shades(self):
        orphaned_shades = self._hash.get('orphaned_shades') or []
        if len(orphaned_shades) == 0:
            return
        shading_group = osmod.ShadingSurfaceGroup(self._openstudio_model)
        shading_group.setShadingSurfaceType('Building')
        for shade in orphaned_shades:
            shade_to_openstudio(shade, self._openstudio_model, shading_group, self._context)

    def create_orphaned_faces(self):
        if self._hash.get('orphaned_faces'):
            raise UnsupportedGeometryError('Orphaned Faces are not translatable to OpenStudio.')

    def create_orphaned_apertures(self):
        if self._hash.get('orphaned_apertures'):
            raise UnsupportedGeometryError('Orphaned Apertures are not translatable to OpenStudio.')

    def create_orphaned_doors(self):
        if self._hash.get('orphaned_doors'):
            raise UnsupportedGeometryError('Orphaned Doors are not translatable to OpenStudio.')

def translate(hash: dict, openstudio_model: osmod.Model = None, log_report: bool = True) -> TranslationResult:
    """
    Translate a Honeybee Model dictionary into an openstudio model.

    Parameters
    ----------
    hash : dict
        the Honeybee Model dictionary.

    openstudio_model : osmod.Model, optional
        an existing model to add the objects to. A new model is created if None.

    log_report : bool, optional
        log the progress of the translation at info level.

    Returns
    -------
    TranslationResult
        the openstudio model with the errors and warnings of the translation.
    """
    hb_model = Model(hash)
    os_model = hb_model.to_openstudio_model(openstudio_model=openstudio_model, log_report=log_report)
    return TranslationResult(os_model, list(hb_model.errors), list(hb_model.warnings))
