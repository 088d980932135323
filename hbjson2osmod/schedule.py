import openstudio
from openstudio import model as osmod

from . import registry
from .errors import UnknownTypeTagError
from .registry import TranslationContext

def _is_limit(value) -> bool:
    # limits are either numbers or {'type': 'NoLimit'}
    return value is not None and not isinstance(value, dict)

def schedule_type_limit_to_openstudio(type_limit: dict, openstudio_model: osmod.Model,
                                      context: TranslationContext) -> osmod.ScheduleTypeLimits:
    """
    Translate a ScheduleTypeLimit into an openstudio ScheduleTypeLimits.

    Parameters
    ----------
    type_limit : dict
        the ScheduleTypeLimit dictionary.

    openstudio_model : osmod.Model
        the model to add the object to.

    context : TranslationContext
        the context of the translation, the result is registered into it.

    Returns
    -------
    osmod.ScheduleTypeLimits
        the resultant schedule type limits.
    """
    os_type_limit = osmod.ScheduleTypeLimits(openstudio_model)
    os_type_limit.setName(type_limit['identifier'])
    lower_limit = type_limit.get('lower_limit')
    if _is_limit(lower_limit):
        os_type_limit.setLowerLimitValue(lower_limit)
    upper_limit = type_limit.get('upper_limit')
    if _is_limit(upper_limit):
        os_type_limit.setUpperLimitValue(upper_limit)
    os_type_limit.setNumericType(type_limit.get('numeric_type', 'Continuous'))
    os_type_limit.setUnitType(type_limit.get('unit_type', 'Dimensionless'))
    context.registry.register(registry.SCHEDULE_TYPE_LIMIT, type_limit['identifier'], os_type_limit)
    return os_type_limit

def add_day_values(day_sch: osmod.ScheduleDay, day_schedule: dict):
    """
    Fill an openstudio ScheduleDay with the values of a Honeybee day schedule.

    Honeybee times mark when a value starts while openstudio times mark when it ends.
    """
    day_sch.setName(day_schedule['identifier'])
    day_sch.clearValues()
    values = day_schedule['values']
    times = day_schedule.get('times', [[0, 0]])
    for i, value in enumerate(values):
        if i + 1 == len(values):
            time_until = openstudio.Time(0, 24, 0, 0)
        else:
            hour, minute = times[i + 1]
            time_until = openstudio.Time(0, hour, minute, 0)
        day_sch.addValue(time_until, value)

def _date(month_day: list[int], is_leap_year: bool = False) -> openstudio.Date:
    month, day = month_day
    if is_leap_year:
        return openstudio.Date(openstudio.MonthOfYear(month), day, 2016)
    return openstudio.Date(openstudio.MonthOfYear(month), day)

def schedule_ruleset_to_openstudio(schedule: dict, openstudio_model: osmod.Model,
                                   context: TranslationContext) -> osmod.ScheduleRuleset:
    """
    Translate a ScheduleRulesetAbridged into an openstudio ScheduleRuleset.

    Parameters
    ----------
    schedule : dict
        the ScheduleRulesetAbridged dictionary.

    openstudio_model : osmod.Model
        the model to add the object to.

    context : TranslationContext
        the context of the translation, the result is registered into it.

    Returns
    -------
    osmod.ScheduleRuleset
        the resultant ruleset.
    """
    sch_id = schedule['identifier']
    sch_ruleset = osmod.ScheduleRuleset(openstudio_model)
    sch_ruleset.setName(sch_id)
    type_limit = context.get_object(registry.SCHEDULE_TYPE_LIMIT, schedule.get('schedule_type_limit'), sch_id)
    if type_limit is not None:
        sch_ruleset.setScheduleTypeLimits(type_limit)

    day_schedules = {}
    for day_schedule in schedule['day_schedules']:
        day_schedules[day_schedule['identifier']] = day_schedule

    add_day_values(sch_ruleset.defaultDaySchedule(), day_schedules[schedule['default_day_schedule']])

    summer_id = schedule.get('summer_designday_schedule')
    if summer_id is not None:
        day_sch = osmod.ScheduleDay(openstudio_model)
        sch_ruleset.setSummerDesignDaySchedule(day_sch)
        add_day_values(sch_ruleset.summerDesignDaySchedule(), day_schedules[summer_id])
        day_sch.remove()

    winter_id = schedule.get('winter_designday_schedule')
    if winter_id is not None:
        day_sch = osmod.ScheduleDay(openstudio_model)
        sch_ruleset.setWinterDesignDaySchedule(day_sch)
        add_day_values(sch_ruleset.winterDesignDaySchedule(), day_schedules[winter_id])
        day_sch.remove()

    holiday_id = schedule.get('holiday_schedule')
    if holiday_id is not None:
        day_sch = osmod.ScheduleDay(openstudio_model)
        sch_ruleset.setHolidaySchedule(day_sch)
        add_day_values(sch_ruleset.holidaySchedule(), day_schedules[holiday_id])
        day_sch.remove()

    # rules at the top of the list take precedence
    is_leap_year = schedule.get('is_leap_year', False)
    for rule_index, rule in enumerate(schedule.get('schedule_rules', [])):
        sch_rule = osmod.ScheduleRule(sch_ruleset)
        add_day_values(sch_rule.daySchedule(), day_schedules[rule['schedule_day']])
        sch_rule.setName(sch_id + ' Rule ' + str(rule_index))
        sch_rule.setStartDate(_date(rule.get('start_date', [1, 1]), is_leap_year))
        sch_rule.setEndDate(_date(rule.get('end_date', [12, 31]), is_leap_year))
        sch_rule.setApplySunday(rule.get('apply_sunday', False))
        sch_rule.setApplyMonday(rule.get('apply_monday', False))
        sch_rule.setApplyTuesday(rule.get('apply_tuesday', False))
        sch_rule.setApplyWednesday(rule.get('apply_wednesday', False))
        sch_rule.setApplyThursday(rule.get('apply_thursday', False))
        sch_rule.setApplyFriday(rule.get('apply_friday', False))
        sch_rule.setApplySaturday(rule.get('apply_saturday', False))
        sch_ruleset.setScheduleRuleIndex(sch_rule, rule_index)

    context.registry.register(registry.SCHEDULE, sch_id, sch_ruleset)
    return sch_ruleset

def schedule_fixed_interval_to_openstudio(schedule: dict, openstudio_model: osmod.Model,
                                          context: TranslationContext) -> osmod.ScheduleFixedInterval:
    """
    Translate a ScheduleFixedIntervalAbridged into an openstudio ScheduleFixedInterval.

    Parameters
    ----------
    schedule : dict
        the ScheduleFixedIntervalAbridged dictionary. values are for every timestep starting at start_date.

    openstudio_model : osmod.Model
        the model to add the object to.

    context : TranslationContext
        the context of the translation, the result is registered into it.

    Returns
    -------
    osmod.ScheduleFixedInterval
        the resultant schedule.
    """
    sch_id = schedule['identifier']
    timestep = schedule.get('timestep', 1)
    start_month, start_day = schedule.get('start_date', [1, 1])
    start_date = _date([start_month, start_day], schedule.get('is_leap_year', False))
    interval_minutes = int(60 / timestep)
    interval = openstudio.Time(0, 0, interval_minutes, 0)
    values = openstudio.createVector(schedule['values'])
    timeseries = openstudio.TimeSeries(start_date, interval, values, '')

    fixed_sch = osmod.ScheduleFixedInterval(openstudio_model)
    fixed_sch.setName(sch_id)
    fixed_sch.setStartMonth(start_month)
    fixed_sch.setStartDay(start_day)
    fixed_sch.setIntervalLength(interval_minutes)
    fixed_sch.setTimeSeries(timeseries)
    type_limit = context.get_object(registry.SCHEDULE_TYPE_LIMIT, schedule.get('schedule_type_limit'), sch_id)
    if type_limit is not None:
        fixed_sch.setScheduleTypeLimits(type_limit)

    context.registry.register(registry.SCHEDULE, sch_id, fixed_sch)
    return fixed_sch

SCHEDULE_BUILDERS = {
    'ScheduleRulesetAbridged': schedule_ruleset_to_openstudio,
    'ScheduleFixedIntervalAbridged': schedule_fixed_interval_to_openstudio,
}

def schedule_to_openstudio(schedule: dict, openstudio_model: osmod.Model, context: TranslationContext):
    schedule_type = schedule.get('type')
    try:
        builder = SCHEDULE_BUILDERS[schedule_type]
    except KeyError:
        raise UnknownTypeTagError('schedule', schedule_type) from None
    return builder(schedule, openstudio_model, context)
