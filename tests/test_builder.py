import pytest

from clinic_page_builder.builder import DUPLICATE_ANCHOR_SUFFIX, MAX_UNDO_STACK, PageBuilder
from clinic_page_builder.catalog import PAGE_PRESETS, STYLE_PRESET_INFO
from clinic_page_builder.config import BuilderSettings
from clinic_page_builder.migrate import create_empty_document
from clinic_page_builder.models.style import FooterConfig, NavbarConfig, NavLink
from clinic_page_builder.templates import get_template


@pytest.fixture
def builder() -> PageBuilder:
    return PageBuilder(create_empty_document())


def sections_of(builder: PageBuilder) -> list:
    return list(builder.current_page.sections)


def test_add_hero_to_empty_document(builder):
    builder.add_section("hero")

    document = builder.document
    assert len(document.pages[0].sections) == 1
    assert document.pages[0].sections[0].data.variant == "centered"


def test_load_selects_home_page_and_is_clean(builder):
    assert builder.current_page.is_home_page
    assert builder.is_dirty is False
    assert builder.can_undo is False
    assert builder.can_redo is False


def test_mutations_are_ignored_without_a_document():
    builder = PageBuilder()

    assert builder.add_section("hero") is None
    builder.toggle_enabled()

    assert builder.document is None
    assert builder.is_dirty is False


def test_add_section_selects_it_and_uses_fresh_id(builder):
    first = builder.add_section("text")
    second = builder.add_section("text")

    assert builder.selected_section_id == second.id
    assert builder.selected_section.id == second.id
    assert first.id != second.id
    assert len({s.id for s in sections_of(builder)}) == 2


def test_add_section_at_index_and_clamped(builder):
    hero = builder.add_section("hero")
    faq = builder.add_section("faq")
    divider = builder.add_section("divider", index=1)
    booking = builder.add_section("booking", index=99)
    text = builder.add_section("text", index=-5)

    assert [s.id for s in sections_of(builder)] == [text.id, hero.id, divider.id, faq.id, booking.id]


def test_remove_section_clears_selection(builder):
    hero = builder.add_section("hero")
    builder.remove_section(hero.id)

    assert sections_of(builder) == []
    assert builder.selected_section_id is None


def test_remove_missing_section_is_absorbed(builder):
    builder.add_section("hero")
    depth = builder.undo_depth
    document = builder.document

    builder.remove_section("no-such-section")

    assert builder.document is document
    assert builder.undo_depth == depth


def test_duplicate_section_inserts_clone_after_original(builder):
    hero = builder.add_section("hero")
    builder.add_section("text")
    builder.update_section_data(hero.id, {"heading": "Namaste"})

    clone = builder.duplicate_section(hero.id)

    sections = sections_of(builder)
    original = sections[0]
    assert sections[1] is clone
    assert clone.id != original.id
    assert clone.anchor_id == original.anchor_id + DUPLICATE_ANCHOR_SUFFIX
    assert clone.data == original.data
    assert clone.data is not original.data
    assert clone.data.heading == "Namaste"


def test_move_section(builder):
    a = builder.add_section("hero")
    b = builder.add_section("text")
    c = builder.add_section("faq")

    builder.move_section(0, 2)

    assert [s.id for s in sections_of(builder)] == [b.id, c.id, a.id]


@pytest.mark.parametrize(("from_index", "to_index"), [(1, 1), (5, 0), (0, 3), (-1, 0)])
def test_move_section_noops(builder, from_index, to_index):
    builder.add_section("hero")
    builder.add_section("text")
    builder.add_section("faq")
    document = builder.document
    depth = builder.undo_depth

    builder.move_section(from_index, to_index)

    assert builder.document is document
    assert builder.undo_depth == depth


def test_update_section_merges_top_level_fields(builder):
    hero = builder.add_section("hero")

    builder.update_section(hero.id, {"anchorId": "welcome", "visible": False})

    updated = sections_of(builder)[0]
    assert updated.anchor_id == "welcome"
    assert updated.visible is False
    assert updated.data == hero.data


def test_update_section_data_merges_into_data(builder):
    gallery = builder.add_section("photo_gallery")

    builder.update_section_data(
        gallery.id,
        {
            "variant": "masonry",
            "manualPhotos": [{"id": "p1", "url": "https://cdn.example.com/a.jpg"}],
        },
    )

    data = sections_of(builder)[0].data
    assert data.variant == "masonry"
    assert data.manual_photos[0].url == "https://cdn.example.com/a.jpg"
    assert data.heading == "Photo Gallery"


def test_toggle_section_visibility(builder):
    hero = builder.add_section("hero")

    builder.toggle_section_visibility(hero.id)
    assert sections_of(builder)[0].visible is False
    builder.toggle_section_visibility(hero.id)
    assert sections_of(builder)[0].visible is True


def test_mutation_never_touches_the_previous_document(builder):
    hero = builder.add_section("hero")
    before = builder.document
    snapshot = before.to_wire()

    builder.update_section_data(hero.id, {"heading": "Changed"})
    builder.add_page("about", "About", "बारेमा")
    builder.set_style_preset("warm")

    assert builder.document is not before
    assert before.to_wire() == snapshot


def test_add_page_selects_new_page(builder):
    builder.add_section("hero")

    page = builder.add_page("about", "About", "बारेमा")

    assert builder.document.pages[-1] is page
    assert builder.current_page_id == page.id
    assert builder.selected_section_id is None
    assert page.is_home_page is False
    assert page.sections == []


def test_add_page_with_taken_slug_is_absorbed(builder):
    builder.add_page("about", "About")
    document = builder.document

    assert builder.add_page("about", "About again") is None
    assert builder.add_page("home", "Second home") is None
    assert builder.document is document


def test_sections_are_scoped_to_current_page(builder):
    builder.add_section("hero")
    about = builder.add_page("about", "About")

    builder.add_section("faq")

    home, about_page = builder.document.pages
    assert [s.type for s in home.sections] == ["hero"]
    assert [s.type for s in about_page.sections] == ["faq"]
    assert about_page.id == about.id


def test_removing_home_page_is_silently_absorbed(builder):
    # Invariant violations are absorbed as no-ops rather than raised.
    home_id = builder.document.pages[0].id
    document = builder.document

    builder.remove_page(home_id)

    assert builder.document is document
    assert sum(page.is_home_page for page in builder.document.pages) == 1
    assert builder.undo_depth == 0
    assert builder.is_dirty is False


def test_removing_selected_page_falls_back_to_home(builder):
    home_id = builder.document.pages[0].id
    about = builder.add_page("about", "About")

    builder.remove_page(about.id)

    assert [page.id for page in builder.document.pages] == [home_id]
    assert builder.current_page_id == home_id


def test_page_updates(builder):
    about = builder.add_page("about", "About")

    builder.rename_page(about.id, "Who we are", "हामी को हौं")
    builder.update_page_slug(about.id, "who-we-are")
    builder.toggle_page_visibility(about.id)

    page = builder.document.get_page(about.id)
    assert (page.title, page.title_ne) == ("Who we are", "हामी को हौं")
    assert page.slug == "who-we-are"
    assert page.visible is False


def test_slug_changes_that_break_uniqueness_are_absorbed(builder):
    home_id = builder.document.pages[0].id
    about = builder.add_page("about", "About")
    builder.add_page("faq", "FAQ")
    document = builder.document

    builder.update_page_slug(about.id, "faq")
    builder.update_page_slug(about.id, "home")
    builder.update_page_slug(home_id, "start")

    assert builder.document is document


def test_document_level_settings(builder):
    navbar = NavbarConfig(links=[NavLink(id="nav-1", label="Book", href="#booking")])
    footer = FooterConfig(enabled=False, copyright="Sunrise Clinic")

    builder.update_navbar(navbar)
    builder.update_footer(footer)
    builder.set_style_preset("minimal")
    builder.toggle_enabled()

    document = builder.document
    assert document.navbar is navbar
    assert document.footer is footer
    assert document.style_preset == "minimal"
    assert document.enabled is True

    builder.set_enabled(False)
    assert builder.document.enabled is False


def test_unknown_style_preset_is_rejected(builder):
    with pytest.raises(ValueError):
        builder.set_style_preset("neon")


def test_apply_template_replaces_document_and_is_undoable(builder):
    original = builder.document
    template = get_template("full").create_config()
    builder.add_page("about", "About")
    before_template = builder.document

    builder.apply_template(template)

    assert builder.document is template
    assert builder.current_page_id == template.pages[0].id
    assert builder.is_dirty is True

    builder.undo()
    assert builder.document is before_template
    builder.undo()
    assert builder.document is original
    assert builder.current_page_id == original.pages[0].id


def test_apply_template_without_a_document():
    builder = PageBuilder()
    template = get_template("minimal").create_config()

    builder.apply_template(template)

    assert builder.document is template
    assert builder.can_undo is False


def test_n_mutations_then_n_undos_restore_initial_state(builder):
    initial = builder.document.to_wire()
    hero = builder.add_section("hero")
    builder.add_section("faq")
    builder.duplicate_section(hero.id)
    builder.move_section(0, 2)
    builder.update_section_data(hero.id, {"subtitle": "Open 24/7"})
    about = builder.add_page("about", "About")
    builder.add_section("text")
    builder.rename_page(about.id, "About us", "")
    builder.set_style_preset("warm")
    builder.toggle_enabled()
    mutations = builder.undo_depth

    for _ in range(mutations):
        builder.undo()

    assert mutations == 10
    assert builder.document.to_wire() == initial
    assert builder.can_undo is False


def test_undo_then_redo_round_trips(builder):
    builder.add_section("hero")
    builder.add_section("text")
    current = builder.document

    builder.undo()
    builder.redo()

    assert builder.document is current
    assert builder.can_redo is False


def test_undo_and_redo_on_empty_stacks_are_noops(builder):
    document = builder.document

    builder.undo()
    builder.redo()

    assert builder.document is document
    assert builder.is_dirty is False


def test_new_edit_clears_redo(builder):
    builder.add_section("hero")
    builder.undo()
    assert builder.can_redo is True

    builder.add_section("text")

    assert builder.can_redo is False


def test_undo_stack_is_bounded(builder):
    builder.add_section("hero")
    after_first = builder.document
    for index in range(MAX_UNDO_STACK):
        builder.update_section_data(builder.current_page.sections[0].id, {"heading": f"v{index}"})

    assert builder.undo_depth == MAX_UNDO_STACK

    for _ in range(MAX_UNDO_STACK):
        builder.undo()

    # the oldest snapshot (the empty document) was evicted
    assert builder.document is after_first
    assert builder.can_undo is False


def test_undo_restores_selection_to_existing_page(builder):
    home_id = builder.document.pages[0].id
    builder.add_page("about", "About")

    builder.undo()

    assert builder.current_page_id == home_id


def test_dirty_flag_lifecycle(builder):
    builder.add_section("hero")
    assert builder.is_dirty is True

    builder.mark_clean()
    assert builder.is_dirty is False

    builder.undo()
    assert builder.is_dirty is True


def test_listeners_see_document_changes_but_not_selection(builder):
    seen = []
    unsubscribe = builder.subscribe(lambda b: seen.append(b.document))

    hero = builder.add_section("hero")
    builder.select_section(None)
    builder.set_current_page(builder.document.pages[0].id)
    builder.toggle_section_visibility(hero.id)
    unsubscribe()
    builder.toggle_section_visibility(hero.id)

    assert len(seen) == 2


def test_acknowledge_save_only_cleans_the_saved_snapshot(builder):
    builder.add_section("hero")
    saved = builder.document

    assert builder.acknowledge_save(saved, "2025-02-02T10:00:00Z") is True
    assert builder.is_dirty is False
    assert builder.document.updated_at == "2025-02-02T10:00:00Z"
    assert builder.undo_depth == 1

    stale = builder.document
    builder.add_section("text")
    assert builder.acknowledge_save(stale, "2025-02-02T10:00:05Z") is False
    assert builder.is_dirty is True


def test_every_page_preset_and_style_preset_can_be_applied(builder):
    for preset in PAGE_PRESETS:
        assert builder.add_page(preset.slug, preset.title, preset.title_ne) is not None
    for info in STYLE_PRESET_INFO:
        builder.set_style_preset(info.value)
        assert builder.document.style_preset == info.value

    assert [page.slug for page in builder.document.pages[1:]] == [preset.slug for preset in PAGE_PRESETS]
    assert builder.document.style_preset == "warm"


def test_setting_unchanged_values_records_no_history(builder):
    builder.set_style_preset("bauhaus")
    builder.set_enabled(False)

    assert builder.undo_depth == 0
    assert builder.is_dirty is False


def test_builder_from_settings_uses_undo_limit():
    builder = PageBuilder.from_settings(BuilderSettings(undo_limit=3), create_empty_document())

    for _ in range(5):
        builder.add_section("divider")

    assert builder.undo_depth == 3


def test_update_clearing_variant_is_absorbed(builder):
    hero = builder.add_section("hero")
    document = builder.document
    depth = builder.undo_depth

    builder.update_section_data(hero.id, {"variant": None})
    builder.update_section_data(hero.id, {"variant": ""})

    assert builder.document is document
    assert builder.undo_depth == depth
    assert sections_of(builder)[0].data.variant == "centered"


def test_invalid_section_update_is_absorbed(builder):
    grid = builder.add_section("services_grid")
    document = builder.document

    builder.update_section_data(grid.id, {"columns": "many"})
    builder.update_section(grid.id, {"visible": "sometimes"})

    assert builder.document is document
    assert sections_of(builder)[0].data.columns == 3


def test_acknowledge_save_refreshes_timestamp_after_later_edits(builder):
    builder.add_section("hero")
    saved = builder.document
    builder.add_section("text")
    depth = builder.undo_depth

    assert builder.acknowledge_save(saved, "2025-02-02T10:00:00Z") is False

    assert builder.document.updated_at == "2025-02-02T10:00:00Z"
    assert len(builder.current_page.sections) == 2
    assert builder.is_dirty is True
    assert builder.undo_depth == depth
