from sprint_alloc.app import ALLOCATION_PAGE, PAGES, SERVICE_KEY, SETUP_PAGE, landing_page, register_page


def test_landing_page_depends_on_connection():
    assert landing_page({}) == SETUP_PAGE
    assert landing_page({SERVICE_KEY: object()}) == ALLOCATION_PAGE


def test_register_page_records_callable():
    @register_page("Scratch page")
    def scratch():
        return "ok"

    try:
        assert PAGES["Scratch page"] is scratch
        assert scratch() == "ok"
    finally:
        PAGES.pop("Scratch page", None)
