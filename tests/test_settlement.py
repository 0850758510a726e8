"""Tests for settlement setup and the player-facing mutations."""

import pytest

from src.agents.production import SiteCategory
from src.agents.worker import Worker


class TestConstruction:
    """Default village layout."""

    def test_population(self, village):
        assert village.population == 6
        assert len(village.employed_workers) == 3
        assert len(village.unemployed) == 3
        assert all(not w.employed for w in village.unemployed)

    def test_resources(self, village):
        assert (village.food, village.wood, village.stone) == (20, 15, 15)

    def test_starter_sites(self, village):
        """One starter site per category, each staffed by one founder."""
        assert [s.category for s in village.sites] == [
            SiteCategory.FARM,
            SiteCategory.LUMBER_MILL,
            SiteCategory.MINE,
        ]
        for site, founder in zip(village.sites, village.workers):
            assert site.roster == [founder]
            assert founder.employed

    def test_unemployed_are_members(self, village):
        for worker in village.unemployed:
            assert any(worker is member for member in village.workers)

    def test_creation_logged(self, village):
        assert "A village was created" in village.event_log.descriptions()


class TestBuild:
    """Strictly-greater cost check."""

    def test_build_with_explicit_costs(self, village):
        assert village.build("FARM", "farm 2", 5, 5)
        assert (village.wood, village.stone) == (10, 10)
        assert village.sites[-1].name == "farm 2"
        assert village.sites[-1].category is SiteCategory.FARM
        assert village.sites[-1].capacity == 5
        assert village.sites[-1].roster == []

    def test_exact_stock_rejected(self, village):
        """Costs equal to the stock fail; anything below goes through."""
        village.change_wood(-11)
        village.change_stone(-14)
        assert (village.wood, village.stone) == (4, 1)
        assert village.build(SiteCategory.FARM, "too dear", 4, 1) is False
        assert len(village.sites) == 3
        assert (village.wood, village.stone) == (4, 1)
        assert village.build(SiteCategory.FARM, "cheap", 3, 0) is True
        assert (village.wood, village.stone) == (1, 1)
        assert len(village.sites) == 4

    def test_failure_needs_both(self, village):
        village.change_stone(-15)
        assert village.build(SiteCategory.MINE, "m", 1, 0) is False
        assert village.wood == 15

    def test_catalogue_costs(self, village):
        """Omitted costs come from the build catalogue."""
        assert village.build("Mine", "Deep Mine")
        assert (village.wood, village.stone) == (9, 12)
        assert village.build("lumber mill", "Sawmill")
        assert (village.wood, village.stone) == (6, 10)
        assert village.sites[-1].category is SiteCategory.LUMBER_MILL

    def test_other_needs_costs(self, village):
        with pytest.raises(ValueError):
            village.build("Statue", "Big Statue")
        assert village.build("Statue", "Big Statue", 1, 1)
        assert village.sites[-1].category is SiteCategory.OTHER


class TestWorkers:
    """Adding, removing and renaming villagers."""

    def test_add_unemployed_worker(self, village):
        worker = Worker("Ada")
        village.add_worker(worker)
        assert village.population == 7
        assert village.unemployed[-1] is worker

    def test_add_employed_worker_skips_queue(self, village):
        village.add_worker(Worker("Ada", employed=True))
        assert village.population == 7
        assert len(village.unemployed) == 3

    def test_remove_unemployed_worker(self, village):
        target = village.workers[3]
        removed = village.remove_worker(3)
        assert removed is target
        assert village.population == 5
        assert all(w is not target for w in village.unemployed)

    def test_remove_rostered_worker_leaves_site(self, village):
        farmer = village.workers[0]
        assert village.remove_worker(0) is farmer
        assert village.sites[0].roster == []

    @pytest.mark.parametrize("index", [-1, 6, 100])
    def test_remove_out_of_range(self, village, index):
        with pytest.raises(IndexError):
            village.remove_worker(index)
        assert village.population == 6

    def test_rename_worker(self, village):
        village.rename_worker(4, "Ada")
        assert village.workers[4].name == "Ada"
        assert "Founder was renamed to Ada" in village.event_log.descriptions()

    def test_rename_worker_out_of_range(self, village):
        with pytest.raises(IndexError):
            village.rename_worker(6, "Nobody")

    def test_rename_site(self, village):
        village.rename_site(1, "Sawmill")
        assert village.sites[1].name == "Sawmill"
        with pytest.raises(IndexError):
            village.rename_site(3, "Ghost")


class TestHireFire:
    """Employment transitions."""

    def test_hire(self, village):
        site = village.sites[0]
        worker = village.unemployed[0]
        assert village.hire(site, worker)
        assert site.roster[-1] is worker
        assert worker.employed
        assert all(w is not worker for w in village.unemployed)
        assert len(village.unemployed) == 2

    def test_hire_removes_duplicate_queue_entries(self, village):
        village.advance_turn()
        worker = village.unemployed[0]
        assert village.hire(village.sites[0], worker)
        assert all(w is not worker for w in village.unemployed)

    def test_hire_into_full_site_changes_nothing(self, village):
        """A full site leaves roster, flag and queue alone."""
        site = village.sites[0]
        site.capacity = 1
        worker = village.unemployed[0]
        assert village.hire(site, worker) is False
        assert site.worker_count == 1
        assert worker.employed is False
        assert village.unemployed[0] is worker

    def test_hire_employed_worker_changes_nothing(self, village):
        """A worker already on a roster cannot be hired onto a second site."""
        farmer = village.workers[0]
        mine = village.sites[2]
        queue_before = list(village.unemployed)
        assert village.hire(mine, farmer) is False
        assert all(w is not farmer for w in mine.roster)
        assert mine.worker_count == 1
        assert village.sites[0].roster == [farmer]
        assert village.unemployed == queue_before

    def test_hire_loaded_working_citizen_rejected(self, village):
        """Workers flagged employed but never queued stay where they are."""
        worker = Worker("Ada", employed=True)
        village.add_worker(worker)
        assert village.hire(village.sites[0], worker) is False
        assert village.sites[0].worker_count == 1

    def test_hire_stranger_rejected(self, village):
        with pytest.raises(ValueError):
            village.hire(village.sites[0], Worker("Stranger"))

    def test_fire(self, village):
        site = village.sites[2]
        miner = site.roster[0]
        assert village.fire(site) is miner
        assert miner.employed is False
        assert village.unemployed[-1] is miner
        assert site.roster == []

    def test_fire_empty_site(self, village):
        village.fire(village.sites[0])
        queue_before = list(village.unemployed)
        assert village.fire(village.sites[0]) is None
        assert village.unemployed == queue_before


class TestResourcePassthrough:
    def test_change_food_clamps(self, village):
        assert village.change_food(-5)
        assert village.food == 15
        assert village.change_food(-16) is False
        assert village.food == 0

    def test_change_wood_and_stone_reject(self, village):
        assert village.change_wood(-16) is False
        assert village.change_stone(-16) is False
        assert (village.wood, village.stone) == (15, 15)
