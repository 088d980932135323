from openstudio import model as osmod

from . import registry
from .registry import TranslationContext

def _set_surface_constructions(os_constructions: osmod.DefaultSurfaceConstructions, wall_id: str, floor_id: str,
                               roof_id: str, set_id: str, context: TranslationContext):
    wall = context.construction(wall_id, set_id)
    if wall is not None:
        os_constructions.setWallConstruction(wall)
    floor = context.construction(floor_id, set_id)
    if floor is not None:
        os_constructions.setFloorConstruction(floor)
    roof = context.construction(roof_id, set_id)
    if roof is not None:
        os_constructions.setRoofCeilingConstruction(roof)

def construction_set_to_openstudio(construction_set: dict, openstudio_model: osmod.Model,
                                   context: TranslationContext) -> osmod.DefaultConstructionSet:
    """
    Translate a ConstructionSetAbridged into an openstudio DefaultConstructionSet.

    Parameters
    ----------
    construction_set : dict
        the ConstructionSetAbridged dictionary. Sub-sets and constructions that are not given are left empty.

    openstudio_model : osmod.Model
        the model to add the construction set to.

    context : TranslationContext
        the context of the translation, constructions are resolved through it.

    Returns
    -------
    osmod.DefaultConstructionSet
        the resultant construction set.
    """
    set_id = construction_set['identifier']
    os_set = osmod.DefaultConstructionSet(openstudio_model)
    os_set.setName(set_id)

    wall_set = construction_set.get('wall_set') or {}
    floor_set = construction_set.get('floor_set') or {}
    roof_set = construction_set.get('roof_ceiling_set') or {}
    aperture_set = construction_set.get('aperture_set') or {}
    door_set = construction_set.get('door_set') or {}

    ext_surfs = osmod.DefaultSurfaceConstructions(openstudio_model)
    ext_surfs.setName(set_id + ' Exterior Surfaces')
    _set_surface_constructions(ext_surfs, wall_set.get('exterior_construction'), floor_set.get('exterior_construction'),
                               roof_set.get('exterior_construction'), set_id, context)
    os_set.setDefaultExteriorSurfaceConstructions(ext_surfs)

    int_surfs = osmod.DefaultSurfaceConstructions(openstudio_model)
    int_surfs.setName(set_id + ' Interior Surfaces')
    _set_surface_constructions(int_surfs, wall_set.get('interior_construction'), floor_set.get('interior_construction'),
                               roof_set.get('interior_construction'), set_id, context)
    os_set.setDefaultInteriorSurfaceConstructions(int_surfs)

    grd_surfs = osmod.DefaultSurfaceConstructions(openstudio_model)
    grd_surfs.setName(set_id + ' Ground Surfaces')
    _set_surface_constructions(grd_surfs, wall_set.get('ground_construction'), floor_set.get('ground_construction'),
                               roof_set.get('ground_construction'), set_id, context)
    os_set.setDefaultGroundContactSurfaceConstructions(grd_surfs)

    ext_subsurfs = osmod.DefaultSubSurfaceConstructions(openstudio_model)
    ext_subsurfs.setName(set_id + ' Exterior SubSurfaces')
    window = context.construction(aperture_set.get('window_construction'), set_id)
    if window is not None:
        ext_subsurfs.setFixedWindowConstruction(window)
    operable = context.construction(aperture_set.get('operable_construction'), set_id)
    if operable is not None:
        ext_subsurfs.setOperableWindowConstruction(operable)
    skylight = context.construction(aperture_set.get('skylight_construction'), set_id)
    if skylight is not None:
        ext_subsurfs.setSkylightConstruction(skylight)
    door = context.construction(door_set.get('exterior_construction'), set_id)
    if door is not None:
        ext_subsurfs.setDoorConstruction(door)
    glass_door = context.construction(door_set.get('exterior_glass_construction'), set_id)
    if glass_door is not None:
        ext_subsurfs.setGlassDoorConstruction(glass_door)
    overhead = context.construction(door_set.get('overhead_construction'), set_id)
    if overhead is not None:
        ext_subsurfs.setOverheadDoorConstruction(overhead)
    os_set.setDefaultExteriorSubSurfaceConstructions(ext_subsurfs)

    int_subsurfs = osmod.DefaultSubSurfaceConstructions(openstudio_model)
    int_subsurfs.setName(set_id + ' Interior SubSurfaces')
    int_window = context.construction(aperture_set.get('interior_construction'), set_id)
    if int_window is not None:
        int_subsurfs.setFixedWindowConstruction(int_window)
        int_subsurfs.setOperableWindowConstruction(int_window)
    int_door = context.construction(door_set.get('interior_construction'), set_id)
    if int_door is not None:
        int_subsurfs.setDoorConstruction(int_door)
    int_glass_door = context.construction(door_set.get('interior_glass_construction'), set_id)
    if int_glass_door is not None:
        int_subsurfs.setGlassDoorConstruction(int_glass_door)
    os_set.setDefaultInteriorSubSurfaceConstructions(int_subsurfs)

    shade = context.construction(construction_set.get('shade_construction'), set_id)
    if shade is not None:
        os_set.setSpaceShadingConstruction(shade)
        os_set.setBuildingShadingConstruction(shade)
        os_set.setSiteShadingConstruction(shade)

    # faces with an AirBoundary type take this construction when they have none of their own
    air_boundary_id = construction_set.get('air_boundary_construction')
    if air_boundary_id is not None:
        context.registry.register(registry.AIR_BOUNDARY_SET, set_id, air_boundary_id)

    context.registry.register(registry.CONSTRUCTION_SET, set_id, os_set)
    return os_set
