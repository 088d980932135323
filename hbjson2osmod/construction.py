from openstudio import model as osmod

from . import registry
from .errors import UnknownTypeTagError
from .material import MATERIAL_BUILDERS
from .registry import TranslationContext

SHADE_LOCATIONS = ('Interior', 'Exterior', 'Between')

def _layers(material_ids: list[str], construction_id: str, context: TranslationContext) -> list[osmod.Material]:
    layers = []
    for material_id in material_ids:
        os_material = context.material(material_id, construction_id)
        if os_material is not None:
            layers.append(os_material)
    return layers

def layered_construction_to_openstudio(construction: dict, openstudio_model: osmod.Model,
                                       context: TranslationContext) -> osmod.Construction:
    """
    Translate an OpaqueConstructionAbridged or WindowConstructionAbridged into an openstudio Construction.

    Parameters
    ----------
    construction : dict
        the construction dictionary, materials are listed from the outside to the inside.

    openstudio_model : osmod.Model
        the model to add the construction to.

    context : TranslationContext
        the context of the translation. Missing materials are reported as warnings.

    Returns
    -------
    osmod.Construction
        the resultant construction.
    """
    construction_id = construction['identifier']
    os_construction = osmod.Construction(openstudio_model)
    os_construction.setName(construction_id)
    os_construction.setLayers(_layers(construction['materials'], construction_id, context))
    return os_construction

class WindowConstructionShade:
    """
    A window construction with a switchable shade.

    The bare window construction is named by the identifier and assigned to the apertures.
    The shaded version ``<identifier>_Shaded`` is used by the shading control.
    """

    def __init__(self, construction: dict, openstudio_model: osmod.Model, context: TranslationContext):
        self.construction = construction
        self.identifier = construction['identifier']
        self.shade_location = construction.get('shade_location', 'Interior')
        if self.shade_location not in SHADE_LOCATIONS:
            raise ValueError(f"Invalid shade location '{self.shade_location}' for '{self.identifier}'.")
        self.shading_control = None

        window_construction = construction['window_construction']
        material_ids = list(window_construction['materials'])
        layers = [(material_id, context.material(material_id, self.identifier)) for material_id in material_ids]
        layers = [(material_id, os_material) for material_id, os_material in layers if os_material is not None]
        self.bare_construction = osmod.Construction(openstudio_model)
        self.bare_construction.setName(self.identifier)
        self.bare_construction.setLayers([os_material for _, os_material in layers])

        self.shade_material = context.material(construction['shade_material'], self.identifier)
        shaded_layers = self._shaded_layers(layers, openstudio_model, context)
        self.shaded_construction = osmod.Construction(openstudio_model)
        self.shaded_construction.setName(self.identifier + '_Shaded')
        self.shaded_construction.setLayers(shaded_layers)

    def _shaded_layers(self, layers: list[tuple], openstudio_model: osmod.Model,
                       context: TranslationContext) -> list[osmod.Material]:
        materials = [os_material for _, os_material in layers]
        if self.shade_material is None:
            return materials
        if self.shade_location == 'Exterior':
            return [self.shade_material] + materials
        if self.shade_location == 'Interior':
            return materials + [self.shade_material]

        # between glass, the innermost gas gap is split in two around the shade
        gap_index = None
        for i, (material_id, _) in enumerate(layers):
            if context.registry.contains(registry.GAS_GAP, material_id):
                gap_index = i
        if gap_index is None:
            context.add_warning(f"No gas gap found in '{self.identifier}' to place the shade between the glass. "
                                "The shade is placed on the interior.")
            self.shade_location = 'Interior'
            return materials + [self.shade_material]

        half_gap = self._half_gap(layers[gap_index][0], openstudio_model, context)
        return materials[:gap_index] + [half_gap, self.shade_material, half_gap] + materials[gap_index + 1:]

    def _half_gap(self, gas_id: str, openstudio_model: osmod.Model, context: TranslationContext) -> osmod.Material:
        half_id = gas_id + '_Half'
        os_half = context.registry.lookup(registry.MATERIAL, half_id)
        if os_half is not None:
            return os_half
        gas_record = dict(context.registry.lookup(registry.GAS_GAP, gas_id))
        gas_record['identifier'] = half_id
        gas_record['thickness'] = gas_record.get('thickness', 0.0125) / 2
        gas_record.pop('display_name', None)
        os_half = MATERIAL_BUILDERS[gas_record['type']](gas_record, openstudio_model, context)
        context.registry.register(registry.MATERIAL, half_id, os_half)
        return os_half

    @property
    def shading_type(self) -> str:
        if self.shade_material is not None and self.shade_material.to_Blind().empty() == False:
            material_kind = 'Blind'
        else:
            material_kind = 'Shade'
        if self.shade_location == 'Between':
            return 'BetweenGlass' + material_kind
        return self.shade_location + material_kind

    def to_openstudio_shading_control(self, openstudio_model: osmod.Model, context: TranslationContext) -> osmod.ShadingControl:
        """
        Get the shading control of this construction, created the first time it is asked for.

        Parameters
        ----------
        openstudio_model : osmod.Model
            the model holding the construction.

        context : TranslationContext
            the context of the translation, used to resolve the control schedule.

        Returns
        -------
        osmod.ShadingControl
            the shading control using the shaded construction.
        """
        if self.shading_control is not None:
            return self.shading_control
        shading_control = osmod.ShadingControl(self.shaded_construction)
        shading_control.setName(self.identifier + '_ShadingControl')
        shading_control.setShadingType(self.shading_type)
        shading_control.setShadingControlType(self.construction.get('control_type', 'AlwaysOn'))
        setpoint = self.construction.get('setpoint')
        if setpoint is not None:
            shading_control.setSetpoint(setpoint)
        schedule = context.schedule(self.construction.get('schedule'), self.identifier)
        if schedule is not None:
            shading_control.setSchedule(schedule)
        self.shading_control = shading_control
        return shading_control

def window_construction_shade_to_openstudio(construction: dict, openstudio_model: osmod.Model,
                                            context: TranslationContext) -> osmod.Construction:
    window_shade = WindowConstructionShade(construction, openstudio_model, context)
    context.registry.register(registry.WINDOW_SHADE, window_shade.identifier, window_shade)
    return window_shade.bare_construction

def shade_construction_to_openstudio(construction: dict, openstudio_model: osmod.Model,
                                     context: TranslationContext) -> osmod.Construction:
    """
    Translate a ShadeConstruction into a one layer openstudio Construction.

    Specular shades are modelled as opaque glass so that their reflections are mirrored.
    """
    construction_id = construction['identifier']
    solar_ref = construction.get('solar_reflectance', 0.2)
    vis_ref = construction.get('visible_reflectance', 0.2)
    if construction.get('is_specular', False):
        os_material = osmod.StandardGlazing(openstudio_model)
        os_material.setSolarTransmittanceatNormalIncidence(0)
        os_material.setFrontSideSolarReflectanceatNormalIncidence(solar_ref)
        os_material.setBackSideSolarReflectanceatNormalIncidence(solar_ref)
        os_material.setVisibleTransmittanceatNormalIncidence(0)
        os_material.setFrontSideVisibleReflectanceatNormalIncidence(vis_ref)
        os_material.setBackSideVisibleReflectanceatNormalIncidence(vis_ref)
    else:
        os_material = osmod.StandardOpaqueMaterial(openstudio_model)
        os_material.setSolarAbsorptance(1 - solar_ref)
        os_material.setVisibleAbsorptance(1 - vis_ref)
    os_material.setName(construction_id)

    os_construction = osmod.Construction(openstudio_model)
    os_construction.setName(construction_id)
    os_construction.setLayers([os_material])
    return os_construction

def air_boundary_construction_to_openstudio(construction: dict, openstudio_model: osmod.Model,
                                            context: TranslationContext) -> osmod.ConstructionAirBoundary:
    construction_id = construction['identifier']
    os_construction = osmod.ConstructionAirBoundary(openstudio_model)
    os_construction.setName(construction_id)
    # air exchange is modelled with zone mixing once the rooms exist
    os_construction.setAirExchangeMethod('None')
    context.registry.register(registry.AIR_BOUNDARY, construction_id, construction)
    return os_construction

CONSTRUCTION_BUILDERS = {
    'OpaqueConstructionAbridged': layered_construction_to_openstudio,
    'WindowConstructionAbridged': layered_construction_to_openstudio,
    'WindowConstructionShadeAbridged': window_construction_shade_to_openstudio,
    'ShadeConstruction': shade_construction_to_openstudio,
    'AirBoundaryConstructionAbridged': air_boundary_construction_to_openstudio,
}

def construction_to_openstudio(construction: dict, openstudio_model: osmod.Model, context: TranslationContext):
    """
    Translate any construction dictionary, chosen by its type, and register the result.

    Parameters
    ----------
    construction : dict
        a construction dictionary with one of the CONSTRUCTION_BUILDERS types.

    openstudio_model : osmod.Model
        the model to add the construction to.

    context : TranslationContext
        the context of the translation.

    Returns
    -------
    osmod.ConstructionBase
        the resultant construction.
    """
    construction_type = construction.get('type')
    try:
        builder = CONSTRUCTION_BUILDERS[construction_type]
    except KeyError:
        raise UnknownTypeTagError('construction', construction_type) from None
    os_construction = builder(construction, openstudio_model, context)
    context.registry.register(registry.CONSTRUCTION, construction['identifier'], os_construction)
    return os_construction
