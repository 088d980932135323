import pytest
import openstudio

from hbjson2osmod import DuplicateRegistrationError
from hbjson2osmod import registry
from hbjson2osmod.registry import IdentifierRegistry, TranslationContext

class TestIdentifierRegistry:
    def test_last_registration_wins(self):
        id_registry = IdentifierRegistry()
        id_registry.register(registry.MATERIAL, 'Mat1', 'first')
        id_registry.register(registry.MATERIAL, 'Mat1', 'second')
        assert id_registry.lookup(registry.MATERIAL, 'Mat1') == 'second'
        assert id_registry.identifiers(registry.MATERIAL) == ['Mat1']

    def test_check_existing(self):
        id_registry = IdentifierRegistry()
        id_registry.register(registry.MATERIAL, 'Mat1', 'first', check_existing=True)
        with pytest.raises(DuplicateRegistrationError, match='Mat1'):
            id_registry.register(registry.MATERIAL, 'Mat1', 'second', check_existing=True)
        assert id_registry.lookup(registry.MATERIAL, 'Mat1') == 'first'

    def test_categories_are_separate(self):
        id_registry = IdentifierRegistry()
        id_registry.register(registry.SCHEDULE, 'Shared Name', 'schedule')
        assert id_registry.contains(registry.SCHEDULE, 'Shared Name')
        assert id_registry.contains(registry.MATERIAL, 'Shared Name') == False
        assert id_registry.lookup(registry.MATERIAL, 'Shared Name') is None
        assert id_registry.is_empty(registry.MATERIAL)

    def test_unknown_category(self):
        id_registry = IdentifierRegistry()
        with pytest.raises(ValueError):
            id_registry.lookup('furniture', 'Chair')

class TestTranslationContext:
    def test_falls_back_to_model(self):
        """
        Objects already in the openstudio model resolve even when they are not registered.
        """
        os_model = openstudio.model.Model()
        os_material = openstudio.model.StandardOpaqueMaterial(os_model)
        os_material.setName('Existing Brick')
        context = TranslationContext(os_model)
        found = context.material('Existing Brick')
        assert found is not None
        assert found.nameString() == 'Existing Brick'
        assert context.exists(registry.MATERIAL, 'Existing Brick')
        assert context.warnings == []

    def test_missing_reference_warns(self):
        context = TranslationContext(openstudio.model.Model())
        assert context.schedule('Ghost Schedule', 'People1') is None
        assert context.warnings == ["Could not find schedule 'Ghost Schedule' referenced by 'People1'."]

    def test_no_reference(self):
        context = TranslationContext(openstudio.model.Model())
        assert context.construction(None, 'Face1') is None
        assert context.warnings == []

    def test_contexts_are_independent(self):
        context1 = TranslationContext(openstudio.model.Model())
        context2 = TranslationContext(openstudio.model.Model())
        context1.registry.register(registry.SCHEDULE, 'Sch1', 'value')
        context1.add_warning('only in the first')
        assert context2.registry.contains(registry.SCHEDULE, 'Sch1') == False
        assert context2.warnings == []

    def test_thermal_zone_registered_by_room(self):
        os_model = openstudio.model.Model()
        context = TranslationContext(os_model)
        os_zone = openstudio.model.ThermalZone(os_model)
        os_zone.setName('Room1 1')
        context.registry.register(registry.THERMAL_ZONE, 'Room1', os_zone)
        assert context.thermal_zone('Room1', 'Ideal Air').nameString() == 'Room1 1'
        assert context.thermal_zone('Room2', 'Ideal Air') is None
        assert context.warnings == ["Could not find thermal zone 'Room2' referenced by 'Ideal Air'."]
