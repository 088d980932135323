"""
Cross references that can only be resolved once every room is in the model.
"""
import logging

from openstudio import model as osmod

from . import registry
from .registry import TranslationContext

logger = logging.getLogger(__name__)

def resolve_air_mixing(context: TranslationContext, openstudio_model: osmod.Model) -> list[osmod.ZoneMixing]:
    """
    Create the zone mixing recorded for the air boundaries between rooms.

    Parameters
    ----------
    context : TranslationContext
        the context of the translation holding the AirMixing records.

    openstudio_model : osmod.Model
        the model holding the thermal zones.

    Returns
    -------
    list[osmod.ZoneMixing]
        the created zone mixing objects. A missing schedule or source zone is left out of the
        zone mixing and reported as a warning.
    """
    zone_mixings = []
    for air_mixing in context.air_mixing:
        os_zone = context.thermal_zone(air_mixing.zone_id, air_mixing.source_zone_id)
        if os_zone is None:
            continue
        zone_mixing = osmod.ZoneMixing(os_zone)
        zone_mixing.setDesignFlowRate(air_mixing.flow_rate)
        if air_mixing.schedule_id is not None:
            schedule = context.schedule(air_mixing.schedule_id, air_mixing.zone_id)
            if schedule is not None:
                zone_mixing.setSchedule(schedule)
        source_zone = context.thermal_zone(air_mixing.source_zone_id, air_mixing.zone_id)
        if source_zone is not None:
            zone_mixing.setSourceZone(source_zone)
        zone_mixings.append(zone_mixing)
    return zone_mixings

def resolve_shading_controls(context: TranslationContext, openstudio_model: osmod.Model) -> list[osmod.ShadingControl]:
    """
    Attach shading controls to the sub surfaces whose construction has a switchable shade.

    The construction of each sub surface is found after the construction sets are applied, so sub
    surfaces getting a shaded construction from a construction set are controlled too.

    Parameters
    ----------
    context : TranslationContext
        the context of the translation holding the shaded window constructions.

    openstudio_model : osmod.Model
        the model holding the sub surfaces.

    Returns
    -------
    list[osmod.ShadingControl]
        the shading controls in use, one per shaded construction.
    """
    shading_controls = {}
    for sub_surface in openstudio_model.getSubSurfaces():
        construction = sub_surface.construction()
        if construction.empty():
            continue
        construction_name = construction.get().name()
        if construction_name.empty():
            continue
        window_shade = context.registry.lookup(registry.WINDOW_SHADE, construction_name.get())
        if window_shade is None:
            continue
        shading_control = window_shade.to_openstudio_shading_control(openstudio_model, context)
        shading_control.addSubSurface(sub_surface)
        shading_controls[window_shade.identifier] = shading_control
    logger.debug('attached %d shading controls', len(shading_controls))
    return list(shading_controls.values())
