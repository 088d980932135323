import pytest
import openstudio

from hbjson2osmod.registry import TranslationContext
from hbjson2osmod.schedule import (schedule_fixed_interval_to_openstudio, schedule_ruleset_to_openstudio,
                                   schedule_type_limit_to_openstudio)

def _context() -> TranslationContext:
    return TranslationContext(openstudio.model.Model())

OFFICE_SCHEDULE = {
    'type': 'ScheduleRulesetAbridged',
    'identifier': 'Office Occupancy',
    'day_schedules': [
        {'type': 'ScheduleDay', 'identifier': 'Office Weekday', 'values': [0, 1, 0], 'times': [[0, 0], [8, 0], [17, 30]]},
        {'type': 'ScheduleDay', 'identifier': 'Office Weekend', 'values': [0], 'times': [[0, 0]]},
    ],
    'default_day_schedule': 'Office Weekend',
    'schedule_rules': [
        {'type': 'ScheduleRuleAbridged', 'schedule_day': 'Office Weekday', 'apply_monday': True,
         'apply_tuesday': True, 'apply_wednesday': True, 'apply_thursday': True, 'apply_friday': True,
         'start_date': [1, 1], 'end_date': [12, 31]},
    ],
    'summer_designday_schedule': 'Office Weekday',
    'winter_designday_schedule': 'Office Weekend',
}

class TestScheduleTypeLimit:
    def test_no_limit(self):
        context = _context()
        type_limit = {'type': 'ScheduleTypeLimit', 'identifier': 'Temperature', 'lower_limit': -273.15,
                      'upper_limit': {'type': 'NoLimit'}, 'unit_type': 'Temperature'}
        os_type_limit = schedule_type_limit_to_openstudio(type_limit, context.openstudio_model, context)
        assert os_type_limit.lowerLimitValue().get() == pytest.approx(-273.15)
        assert os_type_limit.upperLimitValue().empty()
        assert os_type_limit.unitType() == 'Temperature'

class TestScheduleRuleset:
    def test_day_values(self):
        context = _context()
        sch = schedule_ruleset_to_openstudio(OFFICE_SCHEDULE, context.openstudio_model, context)
        assert sch.nameString() == 'Office Occupancy'
        rules = sch.scheduleRules()
        assert len(rules) == 1
        weekday = rules[0].daySchedule()
        assert list(weekday.values()) == [0, 1, 0]
        times = weekday.times()
        # openstudio times mark the end of each value
        assert times[0].hours() == 8
        assert times[1].hours() == 17
        assert times[1].minutes() == 30
        assert times[2].totalHours() == pytest.approx(24)
        assert rules[0].applyMonday()
        assert rules[0].applySunday() == False

    def test_design_days(self):
        context = _context()
        sch = schedule_ruleset_to_openstudio(OFFICE_SCHEDULE, context.openstudio_model, context)
        assert list(sch.summerDesignDaySchedule().values()) == [0, 1, 0]
        assert list(sch.winterDesignDaySchedule().values()) == [0]

    def test_missing_type_limit_warns(self):
        context = _context()
        schedule = dict(OFFICE_SCHEDULE, schedule_type_limit='Fractional')
        sch = schedule_ruleset_to_openstudio(schedule, context.openstudio_model, context)
        assert sch.scheduleTypeLimits().empty()
        assert len(context.warnings) == 1

class TestScheduleFixedInterval:
    def test_hourly_values(self):
        context = _context()
        schedule = {'type': 'ScheduleFixedIntervalAbridged', 'identifier': 'Hourly Occupancy',
                    'values': [0.5] * 8760, 'timestep': 1}
        sch = schedule_fixed_interval_to_openstudio(schedule, context.openstudio_model, context)
        assert sch.nameString() == 'Hourly Occupancy'
        assert sch.intervalLength() == pytest.approx(60)
        assert sch.startMonth() == 1
        assert sch.startDay() == 1

    def test_sub_hourly_interval(self):
        context = _context()
        schedule = {'type': 'ScheduleFixedIntervalAbridged', 'identifier': 'Quarter Hour Occupancy',
                    'values': [0.5] * 8760 * 4, 'timestep': 4}
        sch = schedule_fixed_interval_to_openstudio(schedule, context.openstudio_model, context)
        assert sch.intervalLength() == pytest.approx(15)
