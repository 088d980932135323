import pytest

def _box_faces(identifier: str, origin_x: float = 0.0, size: float = 3.0) -> dict:
    ox = origin_x
    ex = origin_x + size
    s = size
    faces = {
        'Floor': ('Floor', [[ox, 0, 0], [ox, s, 0], [ex, s, 0], [ex, 0, 0]], {'type': 'Ground'}),
        'Roof': ('RoofCeiling', [[ox, 0, s], [ex, 0, s], [ex, s, s], [ox, s, s]], {'type': 'Outdoors'}),
        'South': ('Wall', [[ox, 0, 0], [ex, 0, 0], [ex, 0, s], [ox, 0, s]], {'type': 'Outdoors'}),
        'East': ('Wall', [[ex, 0, 0], [ex, s, 0], [ex, s, s], [ex, 0, s]], {'type': 'Outdoors'}),
        'North': ('Wall', [[ex, s, 0], [ox, s, 0], [ox, s, s], [ex, s, s]], {'type': 'Outdoors'}),
        'West': ('Wall', [[ox, s, 0], [ox, 0, 0], [ox, 0, s], [ox, s, s]], {'type': 'Outdoors'}),
    }
    face_dicts = {}
    for name, (face_type, boundary, bc) in faces.items():
        face_dicts[name] = {
            'type': 'Face',
            'identifier': f'{identifier}_{name}',
            'face_type': face_type,
            'geometry': {'type': 'Face3D', 'boundary': boundary},
            'boundary_condition': dict(bc),
            'properties': {'type': 'FacePropertiesAbridged', 'energy': {'type': 'FaceEnergyPropertiesAbridged'}},
        }
    return face_dicts

def _box_room(identifier: str, origin_x: float = 0.0, energy: dict = None) -> dict:
    """A 3m cube room with faces named <identifier>_Floor, _Roof, _South, _East, _North and _West."""
    faces = _box_faces(identifier, origin_x)
    room = {
        'type': 'Room',
        'identifier': identifier,
        'faces': list(faces.values()),
    }
    if energy is not None:
        room['properties'] = {'type': 'RoomPropertiesAbridged', 'energy': dict(energy, type='RoomEnergyPropertiesAbridged')}
    return room

def _face(room: dict, name: str) -> dict:
    for face in room['faces']:
        if face['identifier'] == f"{room['identifier']}_{name}":
            return face
    raise KeyError(name)

def _model_dict(rooms: list[dict] = None, energy: dict = None, **kwargs) -> dict:
    model = {'type': 'Model', 'identifier': 'Test_Model', 'rooms': rooms or []}
    if energy is not None:
        model['properties'] = {'type': 'ModelProperties', 'energy': dict(energy, type='ModelEnergyProperties')}
    model.update(kwargs)
    return model

def _constant_schedule(identifier: str, value: float, type_limit: str = None) -> dict:
    schedule = {
        'type': 'ScheduleRulesetAbridged',
        'identifier': identifier,
        'day_schedules': [{'type': 'ScheduleDay', 'identifier': identifier + '_Day', 'values': [value], 'times': [[0, 0]]}],
        'default_day_schedule': identifier + '_Day',
    }
    if type_limit is not None:
        schedule['schedule_type_limit'] = type_limit
    return schedule

def _energy_material(identifier: str, thickness: float = 0.1) -> dict:
    return {'type': 'EnergyMaterial', 'identifier': identifier, 'thickness': thickness,
            'conductivity': 0.9, 'density': 1920, 'specific_heat': 790}

@pytest.fixture
def box_room():
    return _box_room

@pytest.fixture
def room_face():
    return _face

@pytest.fixture
def model_dict():
    return _model_dict

@pytest.fixture
def constant_schedule():
    return _constant_schedule

@pytest.fixture
def energy_material():
    return _energy_material
