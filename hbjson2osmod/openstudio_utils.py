import geomie3d
import numpy as np
import openstudio
from openstudio import model as osmod
from ladybug.epw import EPW

def xyzs2ospt3d(xyzs: list[list[float]], decimals: int = 6) -> list[openstudio.openstudioutilitiesgeometry.Point3d]:
    """
    Convert a list of xyz coordinates to openstudio Point3d, rounding the coordinates.

    Parameters
    ----------
    xyzs : list[list[float]]
        list(shape(number of points, 3)), the coordinates.

    decimals : int, optional
        number of decimals to round to.

    Returns
    -------
    list[openstudio.openstudioutilitiesgeometry.Point3d]
        the openstudio points.
    """
    xyzs = np.round(np.array(xyzs, dtype=float), decimals=decimals)
    pt3ds = []
    for xyz in xyzs:
        pt3d = openstudio.openstudioutilitiesgeometry.Point3d(xyz[0], xyz[1], xyz[2])
        pt3ds.append(pt3d)
    return pt3ds

def g3dverts2ospt3d(g3dverts: list[geomie3d.topobj.Vertex], decimals: int = 6) -> list[openstudio.openstudioutilitiesgeometry.Point3d]:
    xyzs = [v.point.xyz for v in g3dverts]
    return xyzs2ospt3d(xyzs, decimals = decimals)

def xyzs2convex_pt3ds(xyzs: list[list[float]], decimals: int = 6) -> list[list[openstudio.openstudioutilitiesgeometry.Point3d]]:
    """
    Convert a polygon into one or more lists of openstudio points. Concave polygons are triangulated.

    Parameters
    ----------
    xyzs : list[list[float]]
        list(shape(number of points, 3)), the boundary of the polygon.

    decimals : int, optional
        number of decimals to round to.

    Returns
    -------
    list[list[openstudio.openstudioutilitiesgeometry.Point3d]]
        one list of points per convex polygon.
    """
    g3d_verts = geomie3d.create.vertex_list(xyzs)
    g3d_face = geomie3d.create.polygon_face_frm_verts(g3d_verts)
    is_convex = geomie3d.calculate.are_polygon_faces_convex([g3d_face])[0]
    if is_convex:
        return [xyzs2ospt3d(xyzs, decimals = decimals)]

    pt3ds_ls = []
    tri_faces = geomie3d.modify.triangulate_face(g3d_face)
    for tri in tri_faces:
        tri_verts = geomie3d.get.vertices_frm_face(tri)
        pt3ds_ls.append(g3dverts2ospt3d(tri_verts, decimals = decimals))
    return pt3ds_ls

def save2idf(idf_path: str, openstudio_model: osmod):
    ft = openstudio.energyplus.ForwardTranslator()
    idf = ft.translateModel(openstudio_model)
    idf.save(idf_path, True)

def setup_ppl_schedule(openstudio_model: osmod, ruleset: osmod.Schedule = None, act_ruleset: osmod.Schedule = None, name: str = None) -> osmod.People:
    # occupancy definition
    ppl_def = osmod.PeopleDefinition(openstudio_model)
    ppl = osmod.People(ppl_def)
    if ruleset is not None:
        ppl.setNumberofPeopleSchedule(ruleset)
    if act_ruleset is not None:
        ppl.setActivityLevelSchedule(act_ruleset)
    if name is not None:
        ppl_def.setName(name + '_definition')
        ppl.setName(name)
    return ppl

def setup_light_schedule(openstudio_model: osmod, ruleset: osmod.Schedule = None, name: str = None) -> osmod.Lights:
    # light definition
    light_def = osmod.LightsDefinition(openstudio_model)
    light = osmod.Lights(light_def)
    if name is not None:
        light_def.setName(name + '_definition')
        light.setName(name)
    if ruleset is not None:
        light.setSchedule(ruleset)
    return light

def setup_elec_equip_schedule(openstudio_model: osmod, ruleset: osmod.Schedule = None, name: str = None) -> osmod.ElectricEquipment:
    # electric equipment definition
    elec_def = osmod.ElectricEquipmentDefinition(openstudio_model)
    elec_equip = osmod.ElectricEquipment(elec_def)
    if name is not None:
        elec_def.setName(name + '_definition')
        elec_equip.setName(name)
    if ruleset is not None:
        elec_equip.setSchedule(ruleset)
    return elec_equip

def setup_gas_equip_schedule(openstudio_model: osmod, ruleset: osmod.Schedule = None, name: str = None) -> osmod.GasEquipment:
    # gas equipment definition
    gas_def = osmod.GasEquipmentDefinition(openstudio_model)
    gas_equip = osmod.GasEquipment(gas_def)
    if name is not None:
        gas_def.setName(name + '_definition')
        gas_equip.setName(name)
    if ruleset is not None:
        gas_equip.setSchedule(ruleset)
    return gas_equip

def std_dgn_sizing_temps() -> dict:
    """
    Standard temperatures used for sizing air loops.

    Returns
    -------
    result : dict
        dictionary of all the standard temperatures used for sizing in degC
        - prehtg_dsgn_sup_air_temp_c = 7.2
        - preclg_dsgn_sup_air_temp_c = 12.8
        - htg_dsgn_sup_air_temp_c = 12.8
        - clg_dsgn_sup_air_temp_c = 12.8
        - zn_htg_dsgn_sup_air_temp_c = 40.0
        - zn_clg_dsgn_sup_air_temp_c = 12.8
    """
    dsgn_temps = {}
    dsgn_temps['prehtg_dsgn_sup_air_temp_f'] = 45.0
    dsgn_temps['preclg_dsgn_sup_air_temp_f'] = 55.0
    dsgn_temps['htg_dsgn_sup_air_temp_f'] = 55.0
    dsgn_temps['clg_dsgn_sup_air_temp_f'] = 55.0
    dsgn_temps['zn_htg_dsgn_sup_air_temp_f'] = 104.0
    dsgn_temps['zn_clg_dsgn_sup_air_temp_f'] = 55.0
    temp_keys = list(dsgn_temps.keys())
    for temp_key in temp_keys:
        c_key = temp_key[:-1] + 'c'
        dsgn_temps[c_key] = openstudio.convert(dsgn_temps[temp_key], 'F', 'C').get()
    return dsgn_temps

def apply_base_fan_variables(fan: osmod.StraightComponent, fan_name: str = None, fan_efficiency: float = None,
                             pressure_rise: float = None, end_use_subcategory: str = None):
    if fan_name is not None: fan.setName(fan_name)
    if fan_efficiency is not None: fan.setFanEfficiency(fan_efficiency)
    if pressure_rise is not None: fan.setPressureRise(pressure_rise)
    if end_use_subcategory is not None: fan.setEndUseSubcategory(end_use_subcategory)
    return fan

def create_fan_constant_volume(openstudio_model: osmod, fan_name: str = None, fan_efficiency: float = None, pressure_rise: float = None,
                               motor_efficiency: float = None, end_use_subcategory: str = None) -> osmod.FanConstantVolume:
    """
    Create a constant volume fan.

    Parameters
    ----------
    openstudio_model : osmod
        openstudio model object.

    fan_name : str, optional
        name of this fan.

    fan_efficiency : float, optional
        efficiency of the fan.

    pressure_rise : float, optional
         fan pressure rise in Pa.

    motor_efficiency : float, optional
        fan motor efficiency.

    end_use_subcategory : str, optional
        end use subcategory name.

    Returns
    -------
    fan : osmod.FanConstantVolume
        fan object.
    """
    fan = osmod.FanConstantVolume(openstudio_model)
    apply_base_fan_variables(fan, fan_name = fan_name, fan_efficiency = fan_efficiency,
                             pressure_rise = pressure_rise, end_use_subcategory = end_use_subcategory)
    if motor_efficiency is not None: fan.setMotorEfficiency(motor_efficiency)
    return fan

def create_fan_variable_volume(openstudio_model: osmod, fan_name: str = None, fan_efficiency: float = None, pressure_rise: float = None,
                               motor_efficiency: float = None, fan_power_minimum_flow_rate_fraction: float = None,
                               end_use_subcategory: str = None) -> osmod.FanVariableVolume:
    """
    Create a variable volume fan.

    Parameters
    ----------
    openstudio_model : osmod
        openstudio model object.

    fan_name : str, optional
        name of this fan.

    fan_efficiency : float, optional
        efficiency of the fan.

    pressure_rise : float, optional
         fan pressure rise in Pa.

    motor_efficiency : float, optional
        fan motor efficiency.

    fan_power_minimum_flow_rate_fraction : float, optional
        minimum flow rate fraction.

    end_use_subcategory : str, optional
        end use subcategory name.

    Returns
    -------
    fan : osmod.FanVariableVolume
        fan object.
    """
    fan = osmod.FanVariableVolume(openstudio_model)
    apply_base_fan_variables(fan, fan_name = fan_name, fan_efficiency = fan_efficiency, pressure_rise = pressure_rise,
                             end_use_subcategory = end_use_subcategory)
    if motor_efficiency is not None: fan.setMotorEfficiency(motor_efficiency)
    if fan_power_minimum_flow_rate_fraction is not None:
        fan.setFanPowerMinimumFlowRateInputMethod('Fraction')
        fan.setFanPowerMinimumFlowFraction(fan_power_minimum_flow_rate_fraction)
    return fan

def create_coil_heating_gas(openstudio_model: osmod, air_loop_node: osmod.Node = None, name: str = 'Gas Htg Coil', schedule: osmod.Schedule = None,
                            nominal_capacity: float = None, efficiency: float = 0.8) -> osmod.CoilHeatingGas:
    htg_coil = osmod.CoilHeatingGas(openstudio_model)
    if air_loop_node is not None:
        htg_coil.addToNode(air_loop_node)
    htg_coil.setName(name)
    if schedule is not None:
        htg_coil.setAvailabilitySchedule(schedule)
    else:
        htg_coil.setAvailabilitySchedule(openstudio_model.alwaysOnDiscreteSchedule())
    if nominal_capacity is not None:
        htg_coil.setNominalCapacity(nominal_capacity)
    htg_coil.setGasBurnerEfficiency(efficiency)
    htg_coil.setParasiticElectricLoad(0)
    htg_coil.setParasiticGasLoad(0)
    return htg_coil

def create_coil_heating_electric(openstudio_model: osmod, air_loop_node: osmod.Node = None, name: str = 'Electric Htg Coil', schedule: osmod.Schedule = None,
                                 nominal_capacity: float = None, efficiency: float = 1.0) -> osmod.CoilHeatingElectric:
    htg_coil = osmod.CoilHeatingElectric(openstudio_model)
    if air_loop_node is not None:
        htg_coil.addToNode(air_loop_node)
    htg_coil.setName(name)
    if schedule is not None:
        htg_coil.setAvailabilitySchedule(schedule)
    else:
        htg_coil.setAvailabilitySchedule(openstudio_model.alwaysOnDiscreteSchedule())
    if nominal_capacity is not None:
        htg_coil.setNominalCapacity(nominal_capacity)
    htg_coil.setEfficiency(efficiency)
    return htg_coil

def create_coil_cooling_dx_single_speed(openstudio_model: osmod, air_loop_node: osmod.Node = None, name: str = '1spd DX Clg Coil',
                                        schedule: osmod.Schedule = None, cop: float = None) -> osmod.CoilCoolingDXSingleSpeed:
    # the default constructor comes with a generic set of performance curves
    clg_coil = osmod.CoilCoolingDXSingleSpeed(openstudio_model)
    if air_loop_node is not None:
        clg_coil.addToNode(air_loop_node)
    clg_coil.setName(name)
    if schedule is not None:
        clg_coil.setAvailabilitySchedule(schedule)
    else:
        clg_coil.setAvailabilitySchedule(openstudio_model.alwaysOnDiscreteSchedule())
    if cop is not None:
        clg_coil.setRatedCOP(cop)
    return clg_coil

def add_schedule_type_limits(openstudio_model: osmod, standard_sch_type_limit: str) -> osmod.ScheduleTypeLimits:
    '''
    Get or create one of the standard schedule type limits.

    Parameters
    ----------
    openstudio_model : osmod
        openstudio model object.

    standard_sch_type_limit : str
        the name of a standard schedule type limit with predefined limits options are Temperature, Fractional and OnOff.

    Returns
    -------
    schedule_type_limits : osmod.ScheduleTypeLimits
        the resultant schedule_type_limits.
    '''
    schedule_type_limits = openstudio_model.getScheduleTypeLimitsByName(standard_sch_type_limit)
    if schedule_type_limits.empty() == False:
        return schedule_type_limits.get()

    standard_sch_type_limit_lwr = standard_sch_type_limit.lower()
    schedule_type_limits = osmod.ScheduleTypeLimits(openstudio_model)
    schedule_type_limits.setName(standard_sch_type_limit)
    if standard_sch_type_limit_lwr == 'temperature':
        schedule_type_limits.setNumericType('Continuous')
        schedule_type_limits.setUnitType('Temperature')
    elif standard_sch_type_limit_lwr == 'fraction' or standard_sch_type_limit_lwr == 'fractional':
        schedule_type_limits.setLowerLimitValue(0.0)
        schedule_type_limits.setUpperLimitValue(1.0)
        schedule_type_limits.setNumericType('Continuous')
        schedule_type_limits.setUnitType('Dimensionless')
    elif standard_sch_type_limit_lwr == 'onoff':
        schedule_type_limits.setLowerLimitValue(0)
        schedule_type_limits.setUpperLimitValue(1)
        schedule_type_limits.setNumericType('Discrete')
        schedule_type_limits.setUnitType('Availability')
    else:
        raise ValueError(f'Invalid standard schedule type limit: {standard_sch_type_limit}')
    return schedule_type_limits

def add_constant_schedule_ruleset(openstudio_model: osmod, value: float, name: str = None, sch_type_limit: str = 'Temperature') -> osmod.ScheduleRuleset:
    '''
    Creates a constant schedule ruleset, reusing an existing one with the same name and value.

    Parameters
    ----------
    openstudio_model : osmod
        openstudio model object.

    value : float
        value for the schedule

    name : str, optional
        schedule name.

    sch_type_limit : str, optional
        the name of a schedule type limit options are Temperature (Default), Fractional and OnOff.

    Returns
    -------
    schedule_ruleset : osmod.ScheduleRuleset
        the resultant ruleset.
    '''
    if name is not None:
        existing_sch = openstudio_model.getScheduleRulesetByName(name)
        if existing_sch.empty() == False:
            existing_sch = existing_sch.get()
            existing_day_sch_vals = existing_sch.defaultDaySchedule().values()
            if len(existing_day_sch_vals) == 1 and abs(existing_day_sch_vals[0] - value) < 1.0e-6:
                return existing_sch

    schedule = osmod.ScheduleRuleset(openstudio_model)
    if name is not None:
        schedule.setName(name)
        schedule.defaultDaySchedule().setName(name + ' Default')

    sch_type_limits_obj = add_schedule_type_limits(openstudio_model, sch_type_limit)
    schedule.setScheduleTypeLimits(sch_type_limits_obj)
    schedule.defaultDaySchedule().addValue(openstudio.Time(0, 24, 0, 0), value)
    return schedule

def add_design_days_and_weather_file(openstudio_model: osmod, epw_path: str, ddy_path: str = None):
    """
    Add WeatherFile, Site, SiteGroundTemperatureBuildingSurface, SiteWaterMainsTemperature and DesignDays to the model using information from epw and ddy files.

    Parameters
    ----------
    openstudio_model : osmod
        openstudio model object.

    epw_path : str
        path to epw file.

    ddy_path : str, optional
        path to ddy file. No design days are added if None.
    """
    epw_file = openstudio.openstudioutilitiesfiletypes.EpwFile(epw_path)
    oswf = openstudio_model.getWeatherFile()
    oswf.setWeatherFile(openstudio_model, epw_file)
    weather_name = epw_file.city() + '_' + epw_file.stateProvinceRegion() + '_' + epw_file.country()

    # Add or update site data
    site = openstudio_model.getSite()
    site.setName(weather_name)
    site.setLatitude(epw_file.latitude())
    site.setLongitude(epw_file.longitude())
    site.setTimeZone(epw_file.timeZone())
    site.setElevation(epw_file.elevation())

    lb_epw = EPW(epw_path)
    grd_temps_dict = lb_epw.monthly_ground_temperature
    grd_temps_0_5 = grd_temps_dict[0.5]
    osm_sitegrd = osmod.SiteGroundTemperatureBuildingSurface(openstudio_model)
    for i, grd_temp in enumerate(grd_temps_0_5):
        osm_sitegrd.setTemperatureByMonth(i+1, grd_temp)

    water_temp = openstudio_model.getSiteWaterMainsTemperature()
    water_temp.setAnnualAverageOutdoorAirTemperature(lb_epw.dry_bulb_temperature.average)
    db_mthly_bounds = lb_epw.dry_bulb_temperature.average_monthly().bounds
    water_temp.setMaximumDifferenceInMonthlyAverageOutdoorAirTemperatures(db_mthly_bounds[1] - db_mthly_bounds[0])

    if ddy_path is None:
        return

    # Remove any existing Design Day objects that are in the file
    dgndys = openstudio_model.getDesignDays()
    for dgndy in dgndys:
        dgndy.remove()

    rev_translate = openstudio.energyplus.ReverseTranslator()
    ddy_mod = rev_translate.loadModel(ddy_path)
    if ddy_mod.empty() == False:
        ddy_mod = ddy_mod.get()
        designday_objs = ddy_mod.getObjectsByType(openstudio.IddObjectType('OS:SizingPeriod:DesignDay'))
        for dd in designday_objs:
            ddy_name = dd.name().get()
            if 'Htg 99.6% Condns DB' in ddy_name or 'Clg .4% Condns DB=>MWB' in ddy_name:
                dd.clone(openstudio_model)
