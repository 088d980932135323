import logging

from openstudio import model as osmod

from . import openstudio_utils
from . import registry
from . import settings
from .registry import TranslationContext

logger = logging.getLogger(__name__)

def _thermal_zones(room_ids: list[str], hvac_id: str, context: TranslationContext) -> list[tuple[str, osmod.ThermalZone]]:
    zones = []
    for room_id in room_ids:
        os_zone = context.get_object(registry.THERMAL_ZONE, room_id, hvac_id)
        if os_zone is not None:
            zones.append((room_id, os_zone))
    return zones

def _is_autosize(value) -> bool:
    return value is None or (isinstance(value, dict) and value.get('type') == 'Autosize')

def _is_no_limit(value) -> bool:
    return isinstance(value, dict) and value.get('type') == 'NoLimit'

def ideal_air_to_openstudio(hvac: dict, openstudio_model: osmod.Model,
                            context: TranslationContext) -> osmod.ZoneHVACIdealLoadsAirSystem:
    """
    Create one openstudio ZoneHVACIdealLoadsAirSystem from an IdealAirSystemAbridged.

    Parameters
    ----------
    hvac : dict
        the IdealAirSystemAbridged dictionary.

    openstudio_model : osmod.Model
        the model to add the system to.

    context : TranslationContext
        the context of the translation, availability schedules are resolved through it.

    Returns
    -------
    osmod.ZoneHVACIdealLoadsAirSystem
        the resultant ideal loads system, not yet assigned to a zone.
    """
    hvac_id = hvac['identifier']
    ideal_air = osmod.ZoneHVACIdealLoadsAirSystem(openstudio_model)
    ideal_air.setName(hvac_id)

    ideal_air.setOutdoorAirEconomizerType(hvac.get('economizer_type', 'DifferentialDryBulb'))
    if hvac.get('demand_controlled_ventilation', False):
        ideal_air.setDemandControlledVentilationType('OccupancySchedule')
    else:
        ideal_air.setDemandControlledVentilationType('None')

    sensible = hvac.get('sensible_heat_recovery', 0)
    latent = hvac.get('latent_heat_recovery', 0)
    if sensible != 0 or latent != 0:
        if latent != 0:
            ideal_air.setHeatRecoveryType('Enthalpy')
        else:
            ideal_air.setHeatRecoveryType('Sensible')
        ideal_air.setSensibleHeatRecoveryEffectiveness(sensible)
        ideal_air.setLatentHeatRecoveryEffectiveness(latent)

    ideal_air.setMaximumHeatingSupplyAirTemperature(hvac.get('heating_air_temperature', 50))
    ideal_air.setMinimumCoolingSupplyAirTemperature(hvac.get('cooling_air_temperature', 13))

    heating_limit = hvac.get('heating_limit')
    if _is_no_limit(heating_limit):
        ideal_air.setHeatingLimit('NoLimit')
    elif _is_autosize(heating_limit):
        ideal_air.setHeatingLimit('LimitFlowRateAndCapacity')
        ideal_air.autosizeMaximumHeatingAirFlowRate()
        ideal_air.autosizeMaximumSensibleHeatingCapacity()
    else:
        ideal_air.setHeatingLimit('LimitCapacity')
        ideal_air.setMaximumSensibleHeatingCapacity(heating_limit)

    cooling_limit = hvac.get('cooling_limit')
    if _is_no_limit(cooling_limit):
        ideal_air.setCoolingLimit('NoLimit')
    elif _is_autosize(cooling_limit):
        ideal_air.setCoolingLimit('LimitFlowRateAndCapacity')
        ideal_air.autosizeMaximumCoolingAirFlowRate()
        ideal_air.autosizeMaximumTotalCoolingCapacity()
    else:
        ideal_air.setCoolingLimit('LimitCapacity')
        ideal_air.setMaximumTotalCoolingCapacity(cooling_limit)

    heat_sch = context.schedule(hvac.get('heating_availability'), hvac_id)
    if heat_sch is not None:
        ideal_air.setHeatingAvailabilitySchedule(heat_sch)
    cool_sch = context.schedule(hvac.get('cooling_availability'), hvac_id)
    if cool_sch is not None:
        ideal_air.setCoolingAvailabilitySchedule(cool_sch)
    return ideal_air

def ideal_air_to_openstudio_zones(hvac: dict, openstudio_model: osmod.Model, room_ids: list[str],
                                  context: TranslationContext) -> list[osmod.ZoneHVACIdealLoadsAirSystem]:
    """
    Give every room served by an IdealAirSystemAbridged its own ideal loads system.

    The systems are named ``<room identifier> Ideal Loads Air System`` so that results can be matched to the rooms.
    """
    ideal_airs = []
    for room_id, os_zone in _thermal_zones(room_ids, hvac['identifier'], context):
        ideal_air = ideal_air_to_openstudio(hvac, openstudio_model, context)
        ideal_air.setName(room_id + settings.IDEAL_AIR_SUFFIX)
        ideal_air.addToThermalZone(os_zone)
        ideal_airs.append(ideal_air)
    return ideal_airs

def _uses_gas_heating(hvac: dict) -> bool:
    equipment_type = hvac.get('equipment_type', '')
    if hvac['type'] == 'ForcedAirFurnace':
        return True
    return 'Electric' not in equipment_type and 'HP' not in equipment_type

def template_to_openstudio(hvac: dict, openstudio_model: osmod.Model, room_ids: list[str],
                           context: TranslationContext) -> osmod.AirLoopHVAC:
    """
    Create one air loop serving all the rooms of a template HVAC.

    Parameters
    ----------
    hvac : dict
        the template HVAC dictionary, type is one of VAV, PVAV, PSZ or ForcedAirFurnace.

    openstudio_model : osmod.Model
        the model to add the air loop to.

    room_ids : list[str]
        identifiers of the rooms served by the system.

    context : TranslationContext
        the context of the translation.

    Returns
    -------
    osmod.AirLoopHVAC
        the resultant air loop named by the hvac identifier.
    """
    hvac_id = hvac['identifier']
    hvac_type = hvac['type']
    is_vav = hvac_type in ('VAV', 'PVAV')
    dsgn_temps = openstudio_utils.std_dgn_sizing_temps()
    always_on = openstudio_model.alwaysOnDiscreteSchedule()

    air_loop = osmod.AirLoopHVAC(openstudio_model)
    air_loop.setName(hvac_id)
    sizing_system = air_loop.sizingSystem()
    sizing_system.setTypeofLoadtoSizeOn('Sensible')
    sizing_system.setPreheatDesignTemperature(dsgn_temps['prehtg_dsgn_sup_air_temp_c'])
    sizing_system.setPrecoolDesignTemperature(dsgn_temps['preclg_dsgn_sup_air_temp_c'])
    sizing_system.setCentralCoolingDesignSupplyAirTemperature(dsgn_temps['clg_dsgn_sup_air_temp_c'])
    sizing_system.setCentralHeatingDesignSupplyAirTemperature(dsgn_temps['htg_dsgn_sup_air_temp_c'])

    supply_outlet = air_loop.supplyOutletNode()
    # components are added upstream of the outlet in the order of the air flow
    if hvac_type != 'ForcedAirFurnace':
        openstudio_utils.create_coil_cooling_dx_single_speed(openstudio_model, air_loop_node=supply_outlet,
                                                             name=hvac_id + ' Clg Coil', schedule=always_on)
    if _uses_gas_heating(hvac):
        openstudio_utils.create_coil_heating_gas(openstudio_model, air_loop_node=supply_outlet,
                                                 name=hvac_id + ' Htg Coil', schedule=always_on)
    else:
        openstudio_utils.create_coil_heating_electric(openstudio_model, air_loop_node=supply_outlet,
                                                      name=hvac_id + ' Htg Coil', schedule=always_on)
    if is_vav:
        fan = openstudio_utils.create_fan_variable_volume(openstudio_model, fan_name=hvac_id + ' Fan', fan_efficiency=0.6,
                                                          pressure_rise=1000.0, motor_efficiency=0.9,
                                                          fan_power_minimum_flow_rate_fraction=0.25)
    else:
        fan = openstudio_utils.create_fan_constant_volume(openstudio_model, fan_name=hvac_id + ' Fan', fan_efficiency=0.6,
                                                          pressure_rise=500.0, motor_efficiency=0.9)
    fan.addToNode(supply_outlet)

    zones = _thermal_zones(room_ids, hvac_id, context)
    if is_vav:
        sat_sch = openstudio_utils.add_constant_schedule_ruleset(openstudio_model, dsgn_temps['clg_dsgn_sup_air_temp_c'],
                                                                 name=hvac_id + ' Supply Air Temp')
        spm = osmod.SetpointManagerScheduled(openstudio_model, sat_sch)
        spm.addToNode(supply_outlet)
    elif len(zones) > 0:
        spm = osmod.SetpointManagerSingleZoneReheat(openstudio_model)
        spm.setControlZone(zones[0][1])
        spm.addToNode(supply_outlet)

    oa_controller = osmod.ControllerOutdoorAir(openstudio_model)
    oa_controller.setName(hvac_id + ' OA Controller')
    oa_controller.setEconomizerControlType(hvac.get('economizer_type', 'NoEconomizer'))
    oa_controller.autosizeMinimumOutdoorAirFlowRate()
    oa_controller.autosizeMaximumOutdoorAirFlowRate()
    if hvac.get('demand_controlled_ventilation', False):
        oa_controller.controllerMechanicalVentilation().setDemandControlledVentilation(True)
    oa_system = osmod.AirLoopHVACOutdoorAirSystem(openstudio_model, oa_controller)
    oa_system.setName(hvac_id + ' OA System')
    oa_system.addToNode(air_loop.supplyInletNode())
    if hvac.get('sensible_heat_recovery', 0) != 0 or hvac.get('latent_heat_recovery', 0) != 0:
        context.add_warning(f"Heat recovery of HVAC '{hvac_id}' is not translated.")

    for room_id, os_zone in zones:
        if is_vav:
            terminal = osmod.AirTerminalSingleDuctVAVNoReheat(openstudio_model, always_on)
        else:
            terminal = osmod.AirTerminalSingleDuctConstantVolumeNoReheat(openstudio_model, always_on)
        terminal.setName(room_id + ' Terminal')
        sizing_zone = os_zone.sizingZone()
        sizing_zone.setZoneCoolingDesignSupplyAirTemperature(dsgn_temps['zn_clg_dsgn_sup_air_temp_c'])
        sizing_zone.setZoneHeatingDesignSupplyAirTemperature(dsgn_temps['zn_htg_dsgn_sup_air_temp_c'])
        air_loop.addBranchForZone(os_zone, terminal)

    logger.debug('created air loop %s serving %d zones', hvac_id, len(zones))
    return air_loop

def hvac_to_openstudio(hvac: dict, openstudio_model: osmod.Model, room_ids: list[str], context: TranslationContext) -> list:
    """
    Translate an HVAC for the rooms it serves.

    Parameters
    ----------
    hvac : dict
        the HVAC dictionary.

    openstudio_model : osmod.Model
        the model to add the systems to.

    room_ids : list[str]
        identifiers of the rooms served by the system.

    context : TranslationContext
        the context of the translation.

    Returns
    -------
    list
        the created systems. HVAC types that cannot be translated are skipped with a warning.
    """
    hvac_type = hvac.get('type')
    if hvac_type == 'IdealAirSystemAbridged':
        return ideal_air_to_openstudio_zones(hvac, openstudio_model, room_ids, context)
    if hvac_type in settings.TEMPLATE_HVAC_TYPES:
        return [template_to_openstudio(hvac, openstudio_model, room_ids, context)]
    context.add_warning(f"HVAC '{hvac['identifier']}' of type '{hvac_type}' is not translatable and was skipped.")
    return []
