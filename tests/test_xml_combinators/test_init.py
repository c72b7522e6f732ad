"""Test module for xml_combinators package initialization."""


def test_package_has_version() -> None:
    """Test that the package has a version attribute."""
    # Arrange & Act
    import xml_combinators

    # Assert
    assert isinstance(xml_combinators.__version__, str)
    assert xml_combinators.__version__ == "0.1.0"


def test_package_has_author() -> None:
    """Test that the package has an author attribute."""
    import xml_combinators

    assert xml_combinators.__author__ == "XML Combinators Team"


def test_top_level_exports() -> None:
    """Test that the progressive API is importable from the package root."""
    # Arrange & Act
    import xml_combinators

    # Assert
    for name in ["parse_string", "parse_file", "XMLSubsetParser", "Element", "ParserConfig"]:
        assert name in xml_combinators.__all__
        assert hasattr(xml_combinators, name)

    result = xml_combinators.parse_string('<div class="float"/>')
    assert result.element == xml_combinators.Element("div", (("class", "float"),))
