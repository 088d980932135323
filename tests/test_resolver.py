import pytest
import openstudio

from hbjson2osmod import translate
from hbjson2osmod.registry import AirMixing, TranslationContext
from hbjson2osmod.resolver import resolve_air_mixing

def _air_boundary_rooms(box_room, room_face):
    room1 = box_room('Room1')
    room2 = box_room('Room2', origin_x=3.0)
    east = room_face(room1, 'East')
    east['face_type'] = 'AirBoundary'
    east['boundary_condition'] = {'type': 'Surface', 'boundary_condition_objects': ['Room2_West', 'Room2']}
    west = room_face(room2, 'West')
    west['face_type'] = 'AirBoundary'
    west['boundary_condition'] = {'type': 'Surface', 'boundary_condition_objects': ['Room1_East', 'Room1']}
    return [room1, room2]

class TestAirMixing:
    def test_air_boundary_mixing(self, model_dict, box_room, room_face):
        """
        Air boundaries without their own construction use the one of the generic construction set.
        """
        result = translate(model_dict(_air_boundary_rooms(box_room, room_face)), log_report=False)
        os_model = result.openstudio_model
        assert result.warnings == []
        zone_mixings = os_model.getZoneMixings()
        assert len(zone_mixings) == 2
        for zone_mixing in zone_mixings:
            # 3m x 3m face with 0.1 m3/s-m2 of mixing
            assert zone_mixing.designFlowRate().get() == pytest.approx(0.9)
            assert zone_mixing.sourceZone().empty() == False
            assert zone_mixing.zone().nameString() != zone_mixing.sourceZone().get().nameString()
            assert zone_mixing.schedule().nameString() == 'Always On'
        east = os_model.getSurfaceByName('Room1_East').get()
        assert east.construction().get().nameString() == 'Generic Air Boundary'

    def test_custom_air_boundary(self, model_dict, box_room, room_face, constant_schedule):
        rooms = _air_boundary_rooms(box_room, room_face)
        air_boundary = {'type': 'AirBoundaryConstructionAbridged', 'identifier': 'Open Air',
                        'air_mixing_per_area': 0.2, 'air_mixing_schedule': 'Mixing Sch'}
        for room in rooms:
            for face in room['faces']:
                if face['face_type'] == 'AirBoundary':
                    face['properties']['energy']['construction'] = 'Open Air'
        energy = {'schedules': [constant_schedule('Mixing Sch', 1)], 'constructions': [air_boundary]}
        os_model = translate(model_dict(rooms, energy=energy), log_report=False).openstudio_model
        for zone_mixing in os_model.getZoneMixings():
            assert zone_mixing.designFlowRate().get() == pytest.approx(1.8)
            assert zone_mixing.schedule().nameString() == 'Mixing Sch'

    def test_missing_source_zone(self):
        os_model = openstudio.model.Model()
        os_zone = openstudio.model.ThermalZone(os_model)
        os_zone.setName('Room1')
        context = TranslationContext(os_model)
        context.air_mixing.append(AirMixing('Room1', 0.5, None, 'Ghost Room'))
        zone_mixings = resolve_air_mixing(context, os_model)
        assert len(zone_mixings) == 1
        assert zone_mixings[0].sourceZone().empty()
        assert len(context.warnings) == 1
        assert 'Ghost Room' in context.warnings[0]

    def test_missing_receiving_zone(self):
        os_model = openstudio.model.Model()
        context = TranslationContext(os_model)
        context.air_mixing.append(AirMixing('Ghost Room', 0.5))
        assert resolve_air_mixing(context, os_model) == []
        assert len(context.warnings) == 1

    def test_zones_found_by_room_identifier(self, model_dict, box_room, room_face):
        os_model = translate(model_dict(_air_boundary_rooms(box_room, room_face)), log_report=False).openstudio_model
        pairs = sorted([(zone_mixing.zone().nameString(), zone_mixing.sourceZone().get().nameString())
                        for zone_mixing in os_model.getZoneMixings()])
        assert pairs == [('Room1', 'Room2'), ('Room2', 'Room1')]

class TestShadingControl:
    def _energy(self, shade_location: str = 'Interior') -> dict:
        materials = [
            {'type': 'EnergyWindowMaterialGlazing', 'identifier': 'Clear Glass'},
            {'type': 'EnergyWindowMaterialGas', 'identifier': 'Air Gap', 'thickness': 0.012},
            {'type': 'EnergyWindowMaterialShade', 'identifier': 'Roller Shade'},
        ]
        shade_construction = {
            'type': 'WindowConstructionShadeAbridged',
            'identifier': 'Shaded Window',
            'window_construction': {'type': 'WindowConstructionAbridged', 'identifier': 'Double Clear',
                                    'materials': ['Clear Glass', 'Air Gap', 'Clear Glass']},
            'shade_material': 'Roller Shade',
            'shade_location': shade_location,
            'control_type': 'OnIfHighSolarOnWindow',
            'setpoint': 200,
        }
        return {'materials': materials, 'constructions': [shade_construction]}

    def _room_with_windows(self, box_room, room_face):
        room = box_room('Room1')
        for name, boundary in (('South', [[1, 0, 1], [2, 0, 1], [2, 0, 2], [1, 0, 2]]),
                               ('East', [[3, 1, 1], [3, 2, 1], [3, 2, 2], [3, 1, 2]])):
            room_face(room, name)['apertures'] = [{
                'type': 'Aperture',
                'identifier': 'Room1_' + name + '_Window',
                'geometry': {'type': 'Face3D', 'boundary': boundary},
                'boundary_condition': {'type': 'Outdoors'},
                'properties': {'type': 'AperturePropertiesAbridged',
                               'energy': {'type': 'ApertureEnergyPropertiesAbridged', 'construction': 'Shaded Window'}},
            }]
        return room

    def test_one_control_for_all_windows(self, model_dict, box_room, room_face):
        room = self._room_with_windows(box_room, room_face)
        result = translate(model_dict([room], energy=self._energy()), log_report=False)
        os_model = result.openstudio_model
        assert result.warnings == []
        shading_controls = os_model.getShadingControls()
        assert len(shading_controls) == 1
        shading_control = shading_controls[0]
        assert shading_control.shadingType() == 'InteriorShade'
        assert shading_control.shadingControlType() == 'OnIfHighSolarOnWindow'
        assert len(shading_control.subSurfaces()) == 2
        assert shading_control.construction().get().nameString() == 'Shaded Window_Shaded'
        window = os_model.getSubSurfaceByName('Room1_South_Window').get()
        assert window.construction().get().nameString() == 'Shaded Window'

    def test_no_window_shades(self, model_dict, box_room, room_face):
        room = self._room_with_windows(box_room, room_face)
        energy = self._energy()
        energy['constructions'] = [{'type': 'WindowConstructionAbridged', 'identifier': 'Shaded Window',
                                    'materials': ['Clear Glass', 'Air Gap', 'Clear Glass']}]
        os_model = translate(model_dict([room], energy=energy), log_report=False).openstudio_model
        assert len(os_model.getShadingControls()) == 0
        assert os_model.getSubSurfaceByName('Room1_South_Window').get().subSurfaceType() == 'FixedWindow'
