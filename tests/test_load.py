import pytest
import openstudio

from hbjson2osmod import translate
from hbjson2osmod.load import people_to_openstudio, ventilation_to_openstudio
from hbjson2osmod.registry import TranslationContext

def _office_program() -> dict:
    return {
        'type': 'ProgramTypeAbridged',
        'identifier': 'Office Program',
        'people': {'type': 'PeopleAbridged', 'identifier': 'Office People', 'people_per_area': 0.05,
                   'occupancy_schedule': 'Office Occ', 'activity_schedule': 'Office Activity'},
        'lighting': {'type': 'LightingAbridged', 'identifier': 'Office Lighting', 'watts_per_area': 10.0,
                     'schedule': 'Office Occ'},
        'electric_equipment': {'type': 'ElectricEquipmentAbridged', 'identifier': 'Office Equipment',
                               'watts_per_area': 8.0, 'schedule': 'Office Occ'},
        'infiltration': {'type': 'InfiltrationAbridged', 'identifier': 'Office Infiltration',
                         'flow_per_exterior_area': 0.0003, 'schedule': 'Office Occ'},
        'setpoint': {'type': 'SetpointAbridged', 'identifier': 'Office Setpoint',
                     'heating_schedule': 'Office Heating', 'cooling_schedule': 'Office Cooling'},
    }

def _office_energy(constant_schedule) -> dict:
    schedules = [constant_schedule('Office Occ', 0.8), constant_schedule('Office Activity', 120),
                 constant_schedule('Office Heating', 21), constant_schedule('Office Cooling', 24)]
    return {'schedules': schedules, 'program_types': [_office_program()]}

class TestProgramType:
    def test_space_type_loads(self, model_dict, box_room, constant_schedule):
        room = box_room('Room1', energy={'program_type': 'Office Program'})
        result = translate(model_dict([room], energy=_office_energy(constant_schedule)), log_report=False)
        os_model = result.openstudio_model
        assert result.warnings == []
        space_type = os_model.getSpaceTypeByName('Office Program').get()
        assert len(space_type.people()) == 1
        assert len(space_type.lights()) == 1
        assert len(space_type.electricEquipment()) == 1
        assert len(space_type.spaceInfiltrationDesignFlowRates()) == 1
        ppl = space_type.people()[0]
        assert ppl.peopleDefinition().peopleperSpaceFloorArea().get() == pytest.approx(0.05)
        assert ppl.numberofPeopleSchedule().get().nameString() == 'Office Occ'
        space = os_model.getSpaceByName('Room1_Space').get()
        assert space.spaceType().get().nameString() == 'Office Program'

    def test_program_setpoint(self, model_dict, box_room, constant_schedule):
        room = box_room('Room1', energy={'program_type': 'Office Program'})
        os_model = translate(model_dict([room], energy=_office_energy(constant_schedule)), log_report=False).openstudio_model
        zone = os_model.getThermalZoneByName('Room1').get()
        thermostat = zone.thermostatSetpointDualSetpoint().get()
        assert thermostat.nameString() == 'Office Setpoint'
        assert thermostat.heatingSetpointTemperatureSchedule().get().nameString() == 'Office Heating'
        assert zone.zoneControlHumidistat().empty()

    def test_room_loads_override(self, model_dict, box_room, constant_schedule):
        """
        Loads of a room are assigned to its space, on top of the space type of its program.
        """
        room_lighting = {'type': 'LightingAbridged', 'identifier': 'Room1 Lighting', 'watts_per_area': 4.0,
                         'schedule': 'Office Occ'}
        room_setpoint = {'type': 'SetpointAbridged', 'identifier': 'Room1 Setpoint', 'heating_schedule': 'Office Heating',
                         'cooling_schedule': 'Office Cooling', 'dehumidifying_schedule': 'Office Occ'}
        room = box_room('Room1', energy={'program_type': 'Office Program', 'lighting': room_lighting,
                                         'setpoint': room_setpoint})
        os_model = translate(model_dict([room], energy=_office_energy(constant_schedule)), log_report=False).openstudio_model
        space = os_model.getSpaceByName('Room1_Space').get()
        assert [light.nameString() for light in space.lights()] == ['Room1 Lighting']
        zone = space.thermalZone().get()
        assert zone.thermostatSetpointDualSetpoint().get().nameString() == 'Room1 Setpoint'
        assert zone.zoneControlHumidistat().get().nameString() == 'Room1 Setpoint Humidistat'

class TestLoads:
    def test_people_latent_fraction(self):
        os_model = openstudio.model.Model()
        context = TranslationContext(os_model)
        space_type = openstudio.model.SpaceType(os_model)
        people = {'type': 'PeopleAbridged', 'identifier': 'People1', 'people_per_area': 0.1, 'latent_fraction': 0.25}
        ppl = people_to_openstudio(people, os_model, space_type, context)
        assert ppl.peopleDefinition().sensibleHeatFraction().get() == pytest.approx(0.75)
        assert ppl.spaceType().get().nameString() == space_type.nameString()

    def test_ventilation_sum(self):
        os_model = openstudio.model.Model()
        context = TranslationContext(os_model)
        space = openstudio.model.Space(os_model)
        ventilation = {'type': 'VentilationAbridged', 'identifier': 'Vent1', 'flow_per_person': 0.0025,
                       'flow_per_area': 0.0003, 'schedule': 'Ghost Schedule'}
        os_vent = ventilation_to_openstudio(ventilation, os_model, space, context)
        assert os_vent.outdoorAirMethod() == 'Sum'
        assert os_vent.outdoorAirFlowperPerson() == pytest.approx(0.0025)
        assert space.designSpecificationOutdoorAir().get().nameString() == 'Vent1'
        assert context.warnings == ["Could not find schedule 'Ghost Schedule' referenced by 'Vent1'."]

class TestAirflowNetwork:
    def _rooms(self, box_room, room_face):
        room1 = box_room('Room1')
        room2 = box_room('Room2', origin_x=3.0)
        east = room_face(room1, 'East')
        east['boundary_condition'] = {'type': 'Surface', 'boundary_condition_objects': ['Room2_West', 'Room2']}
        west = room_face(room2, 'West')
        west['boundary_condition'] = {'type': 'Surface', 'boundary_condition_objects': ['Room1_East', 'Room1']}
        for face in (east, west, room_face(room1, 'South')):
            face['properties']['energy']['vent_crack'] = {'type': 'AFNCrack', 'flow_coefficient': 0.01}
        return [room1, room2]

    def test_multizone(self, model_dict, box_room, room_face):
        energy = {'ventilation_simulation_control': {'type': 'VentilationSimulationControl',
                                                     'vent_control_type': 'MultiZoneWithoutDistribution'}}
        result = translate(model_dict(self._rooms(box_room, room_face), energy=energy), log_report=False)
        os_model = result.openstudio_model
        assert result.warnings == []
        control = os_model.getAirflowNetworkSimulationControl()
        assert control.airflowNetworkControl().get() == 'MultizoneWithoutDistribution'
        assert len(os_model.getAirflowNetworkZones()) == 2
        # the interior pair shares one crack
        assert len(os_model.getAirflowNetworkCracks()) == 2
        assert len(os_model.getAirflowNetworkSurfaces()) == 2

    def test_single_zone(self, model_dict, box_room, room_face):
        energy = {'ventilation_simulation_control': {'type': 'VentilationSimulationControl',
                                                     'vent_control_type': 'SingleZone'}}
        os_model = translate(model_dict(self._rooms(box_room, room_face), energy=energy), log_report=False).openstudio_model
        assert len(os_model.getAirflowNetworkZones()) == 0
        assert len(os_model.getAirflowNetworkCracks()) == 0

class TestWindowVentilation:
    def _room(self, box_room, room_face, vent_control: dict = None) -> dict:
        energy = None
        if vent_control is not None:
            energy = {'window_vent_control': vent_control}
        room = box_room('Room1', energy=energy)
        # a 1m x 1m operable window in the south wall
        aperture = {'type': 'Aperture', 'identifier': 'Room1_Window', 'is_operable': True,
                    'geometry': {'type': 'Face3D', 'boundary': [[1, 0, 1], [2, 0, 1], [2, 0, 2], [1, 0, 2]]},
                    'boundary_condition': {'type': 'Outdoors'},
                    'properties': {'type': 'AperturePropertiesAbridged',
                                   'energy': {'type': 'ApertureEnergyPropertiesAbridged',
                                              'vent_opening': {'type': 'VentilationOpening',
                                                               'fraction_area_operable': 0.5}}}}
        room_face(room, 'South')['apertures'] = [aperture]
        return room

    def test_simple_ventilation(self, model_dict, box_room, room_face, constant_schedule):
        vent_control = {'type': 'VentilationControlAbridged', 'min_indoor_temperature': 22,
                        'schedule': 'Vent Sch'}
        room = self._room(box_room, room_face, vent_control)
        energy = {'schedules': [constant_schedule('Vent Sch', 1)]}
        result = translate(model_dict([room], energy=energy), log_report=False)
        os_model = result.openstudio_model
        assert result.warnings == []
        os_vents = os_model.getZoneVentilationWindandStackOpenAreas()
        assert len(os_vents) == 1
        os_vent = os_vents[0]
        assert os_vent.nameString() == 'Room1_Window_Opening'
        assert os_vent.openingArea() == pytest.approx(0.5)
        assert os_vent.heightDifference() == pytest.approx(1.0)
        # the window faces south
        assert os_vent.effectiveAngle() == pytest.approx(180)
        assert os_vent.minimumIndoorTemperature() == pytest.approx(22)
        assert os_vent.openingAreaFractionSchedule().nameString() == 'Vent Sch'
        assert len(os_model.getAirflowNetworkSimpleOpenings()) == 0
        window = os_model.getSubSurfaceByName('Room1_Window').get()
        assert window.subSurfaceType() == 'OperableWindow'

    def test_no_vent_control(self, model_dict, box_room, room_face):
        room = self._room(box_room, room_face)
        os_model = translate(model_dict([room]), log_report=False).openstudio_model
        assert len(os_model.getZoneVentilationWindandStackOpenAreas()) == 0

    def test_afn_opening(self, model_dict, box_room, room_face):
        room = self._room(box_room, room_face, {'type': 'VentilationControlAbridged', 'min_indoor_temperature': 22})
        energy = {'ventilation_simulation_control': {'type': 'VentilationSimulationControl',
                                                     'vent_control_type': 'MultiZoneWithoutDistribution'}}
        result = translate(model_dict([room], energy=energy), log_report=False)
        os_model = result.openstudio_model
        assert result.warnings == []
        openings = os_model.getAirflowNetworkSimpleOpenings()
        assert len(openings) == 1
        assert openings[0].nameString() == 'Room1_Window_Opening'
        assert len(os_model.getAirflowNetworkSurfaces()) == 1
        assert len(os_model.getZoneVentilationWindandStackOpenAreas()) == 0
        afn_zone = os_model.getThermalZoneByName('Room1').get().getAirflowNetworkZone()
        assert afn_zone.ventilationControlMode() == 'Temperature'
