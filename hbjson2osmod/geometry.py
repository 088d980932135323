import logging

from openstudio import model as osmod

from . import openstudio_utils
from . import registry
from . import settings
from .load import loads_to_openstudio, setpoint_to_openstudio_zone
from .registry import AirMixing, TranslationContext
from .ventcool import (ventilation_opening_to_openstudio, ventilation_opening_to_openstudio_afn,
                       window_vent_control_to_openstudio_afn)

logger = logging.getLogger(__name__)

SURFACE_TYPES = {'Wall': 'Wall', 'Floor': 'Floor', 'RoofCeiling': 'RoofCeiling', 'AirBoundary': 'Wall'}

def _energy_properties(hb_obj: dict) -> dict:
    properties = hb_obj.get('properties') or {}
    return properties.get('energy') or {}

def _boundary_pt3ds(hb_obj: dict, context: TranslationContext) -> list:
    geometry = hb_obj['geometry']
    if geometry.get('holes'):
        context.add_warning(f"Holes in '{hb_obj['identifier']}' are not translated, only its boundary is used.")
    return openstudio_utils.xyzs2ospt3d(geometry['boundary'])

def _set_boundary_condition(os_surface: osmod.Surface, boundary_condition: dict, openstudio_model: osmod.Model):
    bc_type = boundary_condition['type']
    if bc_type == 'Surface':
        adjacent = openstudio_model.getSurfaceByName(boundary_condition['boundary_condition_objects'][0])
        # the adjacency is set from whichever side is translated second
        if adjacent.empty() == False:
            os_surface.setAdjacentSurface(adjacent.get())
        return
    os_surface.setOutsideBoundaryCondition(bc_type)
    if bc_type == 'Outdoors':
        if boundary_condition.get('sun_exposure', True):
            os_surface.setSunExposure('SunExposed')
        else:
            os_surface.setSunExposure('NoSun')
        if boundary_condition.get('wind_exposure', True):
            os_surface.setWindExposure('WindExposed')
        else:
            os_surface.setWindExposure('NoWind')

def shade_to_openstudio(shade: dict, openstudio_model: osmod.Model, shading_group: osmod.ShadingSurfaceGroup,
                        context: TranslationContext) -> list[osmod.ShadingSurface]:
    """
    Translate a Shade into openstudio ShadingSurfaces inside a shading group.

    Parameters
    ----------
    shade : dict
        the Shade dictionary. Concave shades are triangulated.

    openstudio_model : osmod.Model
        the model to add the shade to.

    shading_group : osmod.ShadingSurfaceGroup
        the group to put the shading surfaces in.

    context : TranslationContext
        the context of the translation.

    Returns
    -------
    list[osmod.ShadingSurface]
        the resultant shading surfaces, one per convex polygon.
    """
    shade_id = shade['identifier']
    energy = _energy_properties(shade)
    construction = context.construction(energy.get('construction'), shade_id)
    trans_sch = context.schedule(energy.get('transmittance_schedule'), shade_id)
    pt3ds_ls = openstudio_utils.xyzs2convex_pt3ds(shade['geometry']['boundary'])
    os_shades = []
    for cnt, pt3ds in enumerate(pt3ds_ls):
        os_shade = osmod.ShadingSurface(pt3ds, openstudio_model)
        if len(pt3ds_ls) == 1:
            os_shade.setName(shade_id)
        else:
            os_shade.setName(shade_id + '_' + str(cnt))
        os_shade.setShadingSurfaceGroup(shading_group)
        if construction is not None:
            os_shade.setConstruction(construction)
        if trans_sch is not None:
            os_shade.setTransmittanceSchedule(trans_sch)
        os_shades.append(os_shade)
    return os_shades

def indoor_shade_to_openstudio(shade: dict, openstudio_model: osmod.Model, partition_group: osmod.InteriorPartitionSurfaceGroup,
                               context: TranslationContext) -> osmod.InteriorPartitionSurface:
    shade_id = shade['identifier']
    os_partition = osmod.InteriorPartitionSurface(_boundary_pt3ds(shade, context), openstudio_model)
    os_partition.setName(shade_id)
    os_partition.setInteriorPartitionSurfaceGroup(partition_group)
    construction = context.construction(_energy_properties(shade).get('construction'), shade_id)
    if construction is not None:
        os_partition.setConstruction(construction)
    return os_partition

def aperture_to_openstudio(aperture: dict, openstudio_model: osmod.Model, os_surface: osmod.Surface,
                           context: TranslationContext) -> osmod.SubSurface:
    """
    Translate an Aperture into an openstudio SubSurface of its parent surface.

    Apertures in a RoofCeiling become skylights, the others fixed or operable windows.
    """
    aperture_id = aperture['identifier']
    os_subsurface = osmod.SubSurface(_boundary_pt3ds(aperture, context), openstudio_model)
    os_subsurface.setName(aperture_id)
    os_subsurface.setSurface(os_surface)
    if os_surface.surfaceType() == 'RoofCeiling':
        os_subsurface.setSubSurfaceType('Skylight')
    elif aperture.get('is_operable', False):
        os_subsurface.setSubSurfaceType('OperableWindow')
    else:
        os_subsurface.setSubSurfaceType('FixedWindow')
    _set_subsurface_properties(aperture, os_subsurface, openstudio_model, context)
    return os_subsurface

def door_to_openstudio(door: dict, openstudio_model: osmod.Model, os_surface: osmod.Surface,
                       context: TranslationContext) -> osmod.SubSurface:
    door_id = door['identifier']
    os_subsurface = osmod.SubSurface(_boundary_pt3ds(door, context), openstudio_model)
    os_subsurface.setName(door_id)
    os_subsurface.setSurface(os_surface)
    if door.get('is_glass', False):
        os_subsurface.setSubSurfaceType('GlassDoor')
    else:
        os_subsurface.setSubSurfaceType('Door')
    _set_subsurface_properties(door, os_subsurface, openstudio_model, context)
    return os_subsurface

def _set_subsurface_properties(hb_subsurface: dict, os_subsurface: osmod.SubSurface, openstudio_model: osmod.Model,
                               context: TranslationContext):
    boundary_condition = hb_subsurface.get('boundary_condition') or {'type': 'Outdoors'}
    if boundary_condition['type'] == 'Surface':
        adj_id = boundary_condition['boundary_condition_objects'][0]
        adjacent = openstudio_model.getSubSurfaceByName(adj_id)
        if adjacent.empty() == False:
            os_subsurface.setAdjacentSubSurface(adjacent.get())
    construction = context.construction(_energy_properties(hb_subsurface).get('construction'), hb_subsurface['identifier'])
    if construction is not None:
        os_subsurface.setConstruction(construction)

def _add_afn_crack(face: dict, os_surface: osmod.Surface, openstudio_model: osmod.Model, context: TranslationContext):
    vent_crack = _energy_properties(face).get('vent_crack')
    if vent_crack is None:
        return
    boundary_condition = face['boundary_condition']
    if boundary_condition['type'] == 'Surface':
        # interior pairs share one crack, only the first face translated gets it
        adj_id = boundary_condition['boundary_condition_objects'][0]
        if context.registry.contains(registry.INTERIOR_AFN_SURFACE, adj_id):
            return
        context.registry.register(registry.INTERIOR_AFN_SURFACE, face['identifier'], adj_id)
    os_crack = osmod.AirflowNetworkCrack(openstudio_model, vent_crack['flow_coefficient'],
                                         vent_crack.get('flow_exponent', 0.65), context.afn_reference_crack)
    os_crack.setName(face['identifier'] + '_Crack')
    os_surface.getAirflowNetworkSurface(os_crack)

def _face_construction_id(face: dict, construction_set_id: str, context: TranslationContext) -> str:
    construction_id = _energy_properties(face).get('construction')
    if construction_id is not None:
        return construction_id
    if face['face_type'] != 'AirBoundary':
        return None
    if construction_set_id is not None and context.registry.contains(registry.AIR_BOUNDARY_SET, construction_set_id):
        return context.registry.lookup(registry.AIR_BOUNDARY_SET, construction_set_id)
    return context.registry.lookup(registry.AIR_BOUNDARY_SET, settings.DEFAULT_CONSTRUCTION_SET)

def face_to_openstudio(face: dict, openstudio_model: osmod.Model, os_space: osmod.Space, room_id: str,
                       construction_set_id: str, shading_group: osmod.ShadingSurfaceGroup,
                       context: TranslationContext) -> osmod.Surface:
    """
    Translate a Face with its apertures, doors and shades into an openstudio Surface of a space.

    Parameters
    ----------
    face : dict
        the Face dictionary.

    openstudio_model : osmod.Model
        the model to add the surface to.

    os_space : osmod.Space
        the space of the room the face belongs to.

    room_id : str
        identifier of the room, used to record the zone mixing of air boundaries.

    construction_set_id : str
        the construction set of the room, used to find the construction of air boundaries.

    shading_group : osmod.ShadingSurfaceGroup
        the group receiving the outdoor shades.

    context : TranslationContext
        the context of the translation.

    Returns
    -------
    osmod.Surface
        the resultant surface.
    """
    face_id = face['identifier']
    os_surface = osmod.Surface(_boundary_pt3ds(face, context), openstudio_model)
    os_surface.setName(face_id)
    os_surface.setSpace(os_space)
    os_surface.setSurfaceType(SURFACE_TYPES[face['face_type']])
    boundary_condition = face['boundary_condition']
    _set_boundary_condition(os_surface, boundary_condition, openstudio_model)

    construction_id = _face_construction_id(face, construction_set_id, context)
    construction = context.construction(construction_id, face_id)
    if construction is not None:
        os_surface.setConstruction(construction)

    air_boundary = None
    if construction_id is not None:
        air_boundary = context.registry.lookup(registry.AIR_BOUNDARY, construction_id)
    if air_boundary is not None and boundary_condition['type'] == 'Surface':
        flow_rate = os_surface.grossArea() * air_boundary.get('air_mixing_per_area', 0.1)
        source_zone_id = boundary_condition['boundary_condition_objects'][-1]
        context.air_mixing.append(AirMixing(room_id, flow_rate, air_boundary.get('air_mixing_schedule'), source_zone_id))

    if not context.use_simple_vent:
        _add_afn_crack(face, os_surface, openstudio_model, context)

    for aperture in face.get('apertures') or []:
        aperture_to_openstudio(aperture, openstudio_model, os_surface, context)
        for shade in aperture.get('outdoor_shades') or []:
            shade_to_openstudio(shade, openstudio_model, shading_group, context)
    for door in face.get('doors') or []:
        door_to_openstudio(door, openstudio_model, os_surface, context)
        for shade in door.get('outdoor_shades') or []:
            shade_to_openstudio(shade, openstudio_model, shading_group, context)
    for shade in face.get('outdoor_shades') or []:
        shade_to_openstudio(shade, openstudio_model, shading_group, context)
    return os_surface

def _has_outdoor_shades(room: dict) -> bool:
    if room.get('outdoor_shades'):
        return True
    for face in room['faces']:
        if face.get('outdoor_shades'):
            return True
        for sub_face in (face.get('apertures') or []) + (face.get('doors') or []):
            if sub_face.get('outdoor_shades'):
                return True
    return False

def _operable_apertures(room: dict) -> list[dict]:
    apertures = []
    for face in room['faces']:
        for aperture in face.get('apertures') or []:
            if aperture.get('is_operable', False) and _energy_properties(aperture).get('vent_opening') is not None:
                apertures.append(aperture)
    return apertures

def _add_window_ventilation(room: dict, os_space: osmod.Space, os_zone: osmod.ThermalZone, openstudio_model: osmod.Model,
                            context: TranslationContext):
    """
    Ventilate a room through its operable apertures.

    Without an airflow network, the apertures become simple wind and stack ventilation of the zone, which needs
    the window ventilation control of the room. With an airflow network they become simple openings and the
    window ventilation control sets the venting of the airflow network zone.
    """
    vent_control = _energy_properties(room).get('window_vent_control')
    apertures = _operable_apertures(room)
    if context.use_simple_vent and vent_control is None:
        return
    os_subsurfaces = {}
    for os_surface in os_space.surfaces():
        for os_subsurface in os_surface.subSurfaces():
            os_subsurfaces[os_subsurface.nameString()] = os_subsurface
    for aperture in apertures:
        os_subsurface = os_subsurfaces[aperture['identifier']]
        if context.use_simple_vent:
            ventilation_opening_to_openstudio(aperture, os_subsurface, vent_control, os_zone, openstudio_model, context)
        else:
            ventilation_opening_to_openstudio_afn(aperture, os_subsurface, openstudio_model)
    if not context.use_simple_vent and vent_control is not None:
        window_vent_control_to_openstudio_afn(vent_control, os_zone, openstudio_model, context)

def _building_story(openstudio_model: osmod.Model, story_name: str) -> osmod.BuildingStory:
    os_story = openstudio_model.getBuildingStoryByName(story_name)
    if os_story.empty() == False:
        return os_story.get()
    os_story = osmod.BuildingStory(openstudio_model)
    os_story.setName(story_name)
    return os_story

def room_to_openstudio(room: dict, openstudio_model: osmod.Model, context: TranslationContext) -> osmod.Space:
    """
    Translate a Room into an openstudio ThermalZone named by the room identifier and its Space.

    Parameters
    ----------
    room : dict
        the Room dictionary.

    openstudio_model : osmod.Model
        the model to add the room to.

    context : TranslationContext
        the context of the translation. Air boundaries add zone mixing records to it.

    Returns
    -------
    osmod.Space
        the resultant space.
    """
    room_id = room['identifier']
    energy = _energy_properties(room)
    os_zone = osmod.ThermalZone(openstudio_model)
    os_zone.setName(room_id)
    os_space = osmod.Space(openstudio_model)
    os_space.setName(room_id + settings.SPACE_SUFFIX)
    os_space.setThermalZone(os_zone)
    context.registry.register(registry.THERMAL_ZONE, room_id, os_zone)
    display_name = room.get('display_name')
    if display_name is not None:
        os_space.setDisplayName(display_name)
        os_zone.setDisplayName(display_name)
    os_zone.setMultiplier(room.get('multiplier', 1))
    story = room.get('story')
    if story is not None:
        os_space.setBuildingStory(_building_story(openstudio_model, story))

    construction_set_id = energy.get('construction_set')
    os_construction_set = context.get_object(registry.CONSTRUCTION_SET, construction_set_id, room_id)
    if os_construction_set is not None:
        os_space.setDefaultConstructionSet(os_construction_set)
    os_space_type = context.get_object(registry.PROGRAM_TYPE, energy.get('program_type'), room_id)
    if os_space_type is not None:
        os_space.setSpaceType(os_space_type)

    shading_group = None
    if _has_outdoor_shades(room):
        shading_group = osmod.ShadingSurfaceGroup(openstudio_model)
        shading_group.setName(room_id + ' Shades')
        shading_group.setShadingSurfaceType('Space')
        shading_group.setSpace(os_space)
    for face in room['faces']:
        face_to_openstudio(face, openstudio_model, os_space, room_id, construction_set_id, shading_group, context)
    for shade in room.get('outdoor_shades') or []:
        shade_to_openstudio(shade, openstudio_model, shading_group, context)

    indoor_shades = room.get('indoor_shades') or []
    if len(indoor_shades) > 0:
        partition_group = osmod.InteriorPartitionSurfaceGroup(openstudio_model)
        partition_group.setName(room_id + ' Indoor Shades')
        partition_group.setSpace(os_space)
        for shade in indoor_shades:
            indoor_shade_to_openstudio(shade, openstudio_model, partition_group, context)

    # loads assigned to the room override the ones of its program
    loads_to_openstudio(energy, openstudio_model, os_space, context)
    if energy.get('setpoint') is not None:
        setpoint_to_openstudio_zone(energy['setpoint'], os_zone, openstudio_model, context)
    if not context.use_simple_vent:
        os_zone.getAirflowNetworkZone()
    _add_window_ventilation(room, os_space, os_zone, openstudio_model, context)

    logger.debug('translated room %s', room_id)
    return os_space
