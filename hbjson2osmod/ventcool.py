import numpy as np
from openstudio import model as osmod

from . import openstudio_utils
from .registry import TranslationContext

def ventilation_control_to_openstudio(vent_control: dict, openstudio_model: osmod.Model,
                                      context: TranslationContext) -> osmod.AirflowNetworkSimulationControl:
    """
    Translate a VentilationSimulationControl into the openstudio airflow network simulation control.

    Turns the airflow network on in the context so that rooms and faces get airflow network objects.

    Parameters
    ----------
    vent_control : dict
        the VentilationSimulationControl dictionary, with vent_control_type MultiZoneWithDistribution or
        MultiZoneWithoutDistribution.

    openstudio_model : osmod.Model
        the model to add the control to.

    context : TranslationContext
        the context of the translation, receives the reference crack conditions.

    Returns
    -------
    osmod.AirflowNetworkSimulationControl
        the unique airflow network simulation control of the model.
    """
    vent_sim_control = openstudio_model.getAirflowNetworkSimulationControl()
    vent_sim_control.setName('Window Based Ventilative Cooling')
    # distribution through the HVAC ducts is not modelled
    vent_sim_control.setAirflowNetworkControl('MultizoneWithoutDistribution')
    vent_sim_control.setBuildingType(vent_control.get('building_type', 'LowRise'))
    vent_sim_control.setAzimuthAngleofLongAxisofBuilding(vent_control.get('long_axis_angle', 0))
    vent_sim_control.setBuildingAspectRatio(vent_control.get('aspect_ratio', 1))

    ref_crack = osmod.AirflowNetworkReferenceCrackConditions(openstudio_model)
    ref_crack.setName('Reference Crack Conditions')
    ref_crack.setTemperature(vent_control.get('reference_temperature', 20))
    ref_crack.setBarometricPressure(vent_control.get('reference_pressure', 101325))
    ref_crack.setHumidityRatio(vent_control.get('reference_humidity_ratio', 0))

    context.use_simple_vent = False
    context.afn_reference_crack = ref_crack
    return vent_sim_control

def _opening_azimuth(os_subsurface: osmod.SubSurface) -> float:
    # degrees clockwise from north of the outward normal
    normal = os_subsurface.outwardNormal()
    return float(np.degrees(np.arctan2(normal.x(), normal.y())) % 360)

def _opening_height(aperture: dict) -> float:
    zs = [xyz[2] for xyz in aperture['geometry']['boundary']]
    return max(zs) - min(zs)

def ventilation_opening_to_openstudio(aperture: dict, os_subsurface: osmod.SubSurface, vent_control: dict,
                                      os_zone: osmod.ThermalZone, openstudio_model: osmod.Model,
                                      context: TranslationContext) -> osmod.ZoneVentilationWindandStackOpenArea:
    """
    Translate the VentilationOpening of an operable aperture into simple wind and stack ventilation of its zone.

    Parameters
    ----------
    aperture : dict
        the Aperture dictionary with a vent_opening in its energy properties.

    os_subsurface : osmod.SubSurface
        the translated aperture, used for its area and orientation.

    vent_control : dict
        the VentilationControlAbridged of the room, setting the temperature limits and the schedule.

    os_zone : osmod.ThermalZone
        the zone of the room.

    openstudio_model : osmod.Model
        the model to add the ventilation to.

    context : TranslationContext
        the context of the translation, the schedule is resolved through it.

    Returns
    -------
    osmod.ZoneVentilationWindandStackOpenArea
        the resultant ventilation, assigned to the zone.
    """
    aperture_id = aperture['identifier']
    vent_opening = aperture['properties']['energy']['vent_opening']
    os_vent = osmod.ZoneVentilationWindandStackOpenArea(openstudio_model)
    os_vent.setName(aperture_id + '_Opening')
    os_vent.setOpeningArea(os_subsurface.grossArea() * vent_opening.get('fraction_area_operable', 0.5))
    os_vent.setHeightDifference(_opening_height(aperture) * vent_opening.get('fraction_height_operable', 1.0))
    os_vent.setEffectiveAngle(_opening_azimuth(os_subsurface))
    os_vent.setDischargeCoefficientforOpening(vent_opening.get('discharge_coefficient', 0.45))
    # without cross ventilation the opening only drives stack flow
    if vent_opening.get('wind_cross_vent', False):
        os_vent.autocalculateOpeningEffectiveness()
    else:
        os_vent.setOpeningEffectiveness(0)

    os_vent.setMinimumIndoorTemperature(vent_control.get('min_indoor_temperature', -100))
    os_vent.setMaximumIndoorTemperature(vent_control.get('max_indoor_temperature', 100))
    os_vent.setMinimumOutdoorTemperature(vent_control.get('min_outdoor_temperature', -100))
    os_vent.setMaximumOutdoorTemperature(vent_control.get('max_outdoor_temperature', 100))
    os_vent.setDeltaTemperature(vent_control.get('delta_temperature', -100))
    schedule = context.schedule(vent_control.get('schedule'), aperture_id)
    if schedule is not None:
        os_vent.setOpeningAreaFractionSchedule(schedule)
    os_vent.addToThermalZone(os_zone)
    return os_vent

def ventilation_opening_to_openstudio_afn(aperture: dict, os_subsurface: osmod.SubSurface,
                                          openstudio_model: osmod.Model) -> osmod.AirflowNetworkSurface:
    """
    Translate the VentilationOpening of an operable aperture into an airflow network simple opening.
    """
    vent_opening = aperture['properties']['energy']['vent_opening']
    # openstudio only accepts a closed flow coefficient above zero
    flow_coefficient = max(vent_opening.get('flow_coefficient_closed', 0), 1.0e-09)
    os_opening = osmod.AirflowNetworkSimpleOpening(openstudio_model, flow_coefficient,
                                                   vent_opening.get('flow_exponent_closed', 0.65),
                                                   vent_opening.get('two_way_threshold', 0.0001),
                                                   vent_opening.get('discharge_coefficient', 0.45))
    os_opening.setName(aperture['identifier'] + '_Opening')
    afn_surface = os_subsurface.getAirflowNetworkSurface(os_opening)
    afn_surface.setWindowDoorOpeningFactorOrCrackFactor(vent_opening.get('fraction_area_operable', 0.5))
    return afn_surface

def window_vent_control_to_openstudio_afn(vent_control: dict, os_zone: osmod.ThermalZone, openstudio_model: osmod.Model,
                                          context: TranslationContext) -> osmod.AirflowNetworkZone:
    afn_zone = os_zone.getAirflowNetworkZone()
    afn_zone.setVentilationControlMode('Temperature')
    min_in_temp = vent_control.get('min_indoor_temperature', -100)
    setpoint_sch = openstudio_utils.add_constant_schedule_ruleset(openstudio_model, min_in_temp,
                                                                  name=f'Venting Setpoint {min_in_temp}C')
    afn_zone.setVentilationControlZoneTemperatureSetpointSchedule(setpoint_sch)
    schedule = context.schedule(vent_control.get('schedule'), os_zone.nameString())
    if schedule is not None:
        afn_zone.setVentingAvailabilitySchedule(schedule)
    return afn_zone
