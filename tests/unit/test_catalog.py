"""
Tests for the Service Catalog.
"""

import pytest

from contact_mailer.core.catalog import DEFAULT_SERVICES, ServiceCatalog


class TestServiceCatalog:
    """Tests for ServiceCatalog."""
    
    @pytest.fixture
    def catalog(self):
        return ServiceCatalog()
    
    def test_has_six_default_services(self, catalog):
        """Default catalog should hold the six remodeling services."""
        assert catalog.codes() == (
            "bathroom",
            "kitchen",
            "basement",
            "deck",
            "extensions",
            "carpentry",
        )
        assert len(catalog) == 6
    
    def test_label_for_known_code(self, catalog):
        assert catalog.label_for("kitchen") == "Kitchens"
        assert catalog.label_for("carpentry") == "Custom Carpentry"
    
    def test_label_for_unknown_code_is_none(self, catalog):
        assert catalog.label_for("nonexistent") is None
        assert catalog.label_for(None) is None
        assert catalog.label_for(["kitchen"]) is None
    
    def test_is_valid_code(self, catalog):
        assert catalog.is_valid_code("deck") is True
        assert catalog.is_valid_code("Deck") is False
        assert catalog.is_valid_code("") is False
        assert catalog.is_valid_code(42) is False
        assert catalog.is_valid_code({"deck": 1}) is False
    
    def test_catalog_is_read_only(self, catalog):
        with pytest.raises(TypeError):
            catalog._services["pool"] = "Pools"  # type: ignore[index]
        with pytest.raises(TypeError):
            DEFAULT_SERVICES["pool"] = "Pools"  # type: ignore[index]
    
    def test_custom_services(self):
        catalog = ServiceCatalog({"roofing": "Roofing"})
        
        assert catalog.is_valid_code("roofing")
        assert not catalog.is_valid_code("kitchen")
        assert dict(catalog) == {"roofing": "Roofing"}
