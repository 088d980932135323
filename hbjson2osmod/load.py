from openstudio import model as osmod

from . import openstudio_utils
from .registry import TranslationContext

def _assign_parent(os_load, parent):
    # loads hang either from a SpaceType (program) or a Space (room override)
    if isinstance(parent, osmod.SpaceType):
        os_load.setSpaceType(parent)
    else:
        os_load.setSpace(parent)

def people_to_openstudio(people: dict, openstudio_model: osmod.Model, parent, context: TranslationContext) -> osmod.People:
    """
    Translate a PeopleAbridged into openstudio People.

    Parameters
    ----------
    people : dict
        the PeopleAbridged dictionary.

    openstudio_model : osmod.Model
        the model to add the load to.

    parent : osmod.SpaceType | osmod.Space
        the space type or space the load belongs to.

    context : TranslationContext
        the context of the translation, schedules are resolved through it.

    Returns
    -------
    osmod.People
        the resultant people load.
    """
    load_id = people['identifier']
    occ_sch = context.schedule(people.get('occupancy_schedule'), load_id)
    act_sch = context.schedule(people.get('activity_schedule'), load_id)
    ppl = openstudio_utils.setup_ppl_schedule(openstudio_model, ruleset=occ_sch, act_ruleset=act_sch, name=load_id)
    ppl_def = ppl.peopleDefinition()
    ppl_def.setPeopleperSpaceFloorArea(people['people_per_area'])
    ppl_def.setFractionRadiant(people.get('radiant_fraction', 0.3))
    latent_fraction = people.get('latent_fraction', 'autocalculate')
    if isinstance(latent_fraction, str):
        ppl_def.autocalculateSensibleHeatFraction()
    else:
        ppl_def.setSensibleHeatFraction(1 - latent_fraction)
    _assign_parent(ppl, parent)
    return ppl

def lighting_to_openstudio(lighting: dict, openstudio_model: osmod.Model, parent, context: TranslationContext) -> osmod.Lights:
    load_id = lighting['identifier']
    sch = context.schedule(lighting.get('schedule'), load_id)
    light = openstudio_utils.setup_light_schedule(openstudio_model, ruleset=sch, name=load_id)
    light_def = light.lightsDefinition()
    light_def.setWattsperSpaceFloorArea(lighting['watts_per_area'])
    light_def.setReturnAirFraction(lighting.get('return_air_fraction', 0))
    light_def.setFractionRadiant(lighting.get('radiant_fraction', 0.32))
    light_def.setFractionVisible(lighting.get('visible_fraction', 0.25))
    _assign_parent(light, parent)
    return light

def electric_equipment_to_openstudio(equipment: dict, openstudio_model: osmod.Model, parent,
                                     context: TranslationContext) -> osmod.ElectricEquipment:
    load_id = equipment['identifier']
    sch = context.schedule(equipment.get('schedule'), load_id)
    elec_equip = openstudio_utils.setup_elec_equip_schedule(openstudio_model, ruleset=sch, name=load_id)
    elec_def = elec_equip.electricEquipmentDefinition()
    elec_def.setWattsperSpaceFloorArea(equipment['watts_per_area'])
    elec_def.setFractionRadiant(equipment.get('radiant_fraction', 0))
    elec_def.setFractionLatent(equipment.get('latent_fraction', 0))
    elec_def.setFractionLost(equipment.get('lost_fraction', 0))
    _assign_parent(elec_equip, parent)
    return elec_equip

def gas_equipment_to_openstudio(equipment: dict, openstudio_model: osmod.Model, parent,
                                context: TranslationContext) -> osmod.GasEquipment:
    load_id = equipment['identifier']
    sch = context.schedule(equipment.get('schedule'), load_id)
    gas_equip = openstudio_utils.setup_gas_equip_schedule(openstudio_model, ruleset=sch, name=load_id)
    gas_def = gas_equip.gasEquipmentDefinition()
    gas_def.setWattsperSpaceFloorArea(equipment['watts_per_area'])
    gas_def.setFractionRadiant(equipment.get('radiant_fraction', 0))
    gas_def.setFractionLatent(equipment.get('latent_fraction', 0))
    gas_def.setFractionLost(equipment.get('lost_fraction', 0))
    _assign_parent(gas_equip, parent)
    return gas_equip

def infiltration_to_openstudio(infiltration: dict, openstudio_model: osmod.Model, parent,
                               context: TranslationContext) -> osmod.SpaceInfiltrationDesignFlowRate:
    load_id = infiltration['identifier']
    os_infil = osmod.SpaceInfiltrationDesignFlowRate(openstudio_model)
    os_infil.setName(load_id)
    os_infil.setFlowperExteriorSurfaceArea(infiltration['flow_per_exterior_area'])
    sch = context.schedule(infiltration.get('schedule'), load_id)
    if sch is not None:
        os_infil.setSchedule(sch)
    os_infil.setConstantTermCoefficient(infiltration.get('constant_coefficient', 1))
    os_infil.setTemperatureTermCoefficient(infiltration.get('temperature_coefficient', 0))
    os_infil.setVelocityTermCoefficient(infiltration.get('velocity_coefficient', 0))
    _assign_parent(os_infil, parent)
    return os_infil

def ventilation_to_openstudio(ventilation: dict, openstudio_model: osmod.Model, parent,
                              context: TranslationContext) -> osmod.DesignSpecificationOutdoorAir:
    """
    Translate a VentilationAbridged into an openstudio DesignSpecificationOutdoorAir.

    The different flow criteria are summed together by EnergyPlus.
    """
    load_id = ventilation['identifier']
    os_vent = osmod.DesignSpecificationOutdoorAir(openstudio_model)
    os_vent.setName(load_id)
    os_vent.setOutdoorAirMethod('Sum')
    os_vent.setOutdoorAirFlowperPerson(ventilation.get('flow_per_person', 0))
    os_vent.setOutdoorAirFlowperFloorArea(ventilation.get('flow_per_area', 0))
    os_vent.setOutdoorAirFlowAirChangesperHour(ventilation.get('air_changes_per_hour', 0))
    os_vent.setOutdoorAirFlowRate(ventilation.get('flow_per_zone', 0))
    sch = context.schedule(ventilation.get('schedule'), load_id)
    if sch is not None:
        os_vent.setOutdoorAirFlowRateFractionSchedule(sch)
    parent.setDesignSpecificationOutdoorAir(os_vent)
    return os_vent

def has_humidity_control(setpoint: dict) -> bool:
    return setpoint.get('humidifying_schedule') is not None or setpoint.get('dehumidifying_schedule') is not None

def setpoint_to_openstudio_thermostat(setpoint: dict, openstudio_model: osmod.Model,
                                      context: TranslationContext) -> osmod.ThermostatSetpointDualSetpoint:
    """
    Translate the temperature part of a SetpointAbridged into an openstudio dual setpoint thermostat.

    Parameters
    ----------
    setpoint : dict
        the SetpointAbridged dictionary.

    openstudio_model : osmod.Model
        the model to add the thermostat to.

    context : TranslationContext
        the context of the translation, schedules are resolved through it.

    Returns
    -------
    osmod.ThermostatSetpointDualSetpoint
        the resultant thermostat, not yet assigned to a zone.
    """
    setpoint_id = setpoint['identifier']
    thermostat = osmod.ThermostatSetpointDualSetpoint(openstudio_model)
    thermostat.setName(setpoint_id)
    heat_sch = context.schedule(setpoint.get('heating_schedule'), setpoint_id)
    if heat_sch is not None:
        thermostat.setHeatingSetpointTemperatureSchedule(heat_sch)
    cool_sch = context.schedule(setpoint.get('cooling_schedule'), setpoint_id)
    if cool_sch is not None:
        thermostat.setCoolingSetpointTemperatureSchedule(cool_sch)
    return thermostat

def setpoint_to_openstudio_humidistat(setpoint: dict, openstudio_model: osmod.Model,
                                      context: TranslationContext) -> osmod.ZoneControlHumidistat:
    setpoint_id = setpoint['identifier']
    humidistat = osmod.ZoneControlHumidistat(openstudio_model)
    humidistat.setName(setpoint_id + ' Humidistat')
    humid_sch = context.schedule(setpoint.get('humidifying_schedule'), setpoint_id)
    if humid_sch is not None:
        humidistat.setHumidifyingRelativeHumiditySetpointSchedule(humid_sch)
    dehumid_sch = context.schedule(setpoint.get('dehumidifying_schedule'), setpoint_id)
    if dehumid_sch is not None:
        humidistat.setDehumidifyingRelativeHumiditySetpointSchedule(dehumid_sch)
    return humidistat

def setpoint_to_openstudio_zone(setpoint: dict, thermal_zone: osmod.ThermalZone, openstudio_model: osmod.Model,
                                context: TranslationContext):
    """
    Give a thermal zone the thermostat, and the humidistat when humidity is controlled, of a SetpointAbridged.
    """
    thermostat = setpoint_to_openstudio_thermostat(setpoint, openstudio_model, context)
    thermal_zone.setThermostatSetpointDualSetpoint(thermostat)
    if has_humidity_control(setpoint):
        humidistat = setpoint_to_openstudio_humidistat(setpoint, openstudio_model, context)
        thermal_zone.setZoneControlHumidistat(humidistat)

def loads_to_openstudio(loads: dict, openstudio_model: osmod.Model, parent, context: TranslationContext):
    """
    Translate every load of a program type or room into openstudio objects assigned to the parent.

    Parameters
    ----------
    loads : dict
        dictionary with the optional keys people, lighting, electric_equipment, gas_equipment,
        infiltration and ventilation.

    openstudio_model : osmod.Model
        the model to add the loads to.

    parent : osmod.SpaceType | osmod.Space
        the space type or space the loads belong to.

    context : TranslationContext
        the context of the translation.
    """
    if loads.get('people') is not None:
        people_to_openstudio(loads['people'], openstudio_model, parent, context)
    if loads.get('lighting') is not None:
        lighting_to_openstudio(loads['lighting'], openstudio_model, parent, context)
    if loads.get('electric_equipment') is not None:
        electric_equipment_to_openstudio(loads['electric_equipment'], openstudio_model, parent, context)
    if loads.get('gas_equipment') is not None:
        gas_equipment_to_openstudio(loads['gas_equipment'], openstudio_model, parent, context)
    if loads.get('infiltration') is not None:
        infiltration_to_openstudio(loads['infiltration'], openstudio_model, parent, context)
    if loads.get('ventilation') is not None:
        ventilation_to_openstudio(loads['ventilation'], openstudio_model, parent, context)
