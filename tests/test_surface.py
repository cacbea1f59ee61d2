#
# Embcon - Surface Tests
#

# Local ----------------------------------------------------------------------------------------------------------------
from embcon.markup import StyleTag
from embcon.surface import MemorySurface, Surface


# Tests ----------------------------------------------------------------------------------------------------------------

class TestMemorySurface:
    def test_protocol(self, surface):
        assert isinstance(surface, Surface)

    def test_append_returns_distinct_handles(self, surface):
        h1 = surface.append("one", StyleTag.LOG)
        h2 = surface.append("two", StyleTag.WARNING)
        assert h1 != h2
        assert len(surface) == 2
        assert surface.text() == "one\ntwo"
        assert [line.level for line in surface.lines] == [StyleTag.LOG, StyleTag.WARNING]

    def test_replace(self, surface):
        handle = surface.append("one", StyleTag.LOG)
        surface.replace(handle, "uno")
        assert surface.fragment(handle) == "uno"

    def test_replace_unknown_handle(self, surface):
        surface.append("one", StyleTag.LOG)
        surface.replace(999, "x")
        assert surface.text() == "one"
        assert surface.fragment(999) is None

    def test_clear(self, surface):
        surface.append("one", StyleTag.LOG)
        surface.clear()
        assert len(surface) == 0
        assert surface.text() == ""

    def test_handles_not_reused_after_clear(self, surface):
        h1 = surface.append("one", StyleTag.LOG)
        surface.clear()
        h2 = surface.append("two", StyleTag.LOG)
        assert h1 != h2

    def test_html(self):
        surface = MemorySurface()
        surface.mount("300px", "50%")
        surface.append('<span class="ec-string">hi</span>', StyleTag.ERROR)
        assert surface.html() == (
            '<div class="embedded-console" style="width: 300px; height: 50%;">'
            '<div class="ec-entry ec-error"><span class="ec-string">hi</span></div>'
            "</div>"
        )
