"""Tests for attack descriptors and attack pools."""

import random

import pytest

from brass.models.attacks import ReducedAttacks, TargetedAttack
from brass.models.errors import AttacksError, DamageError


class TestTargetedAttack:
    """Test the single attack descriptor."""

    def test_sum_damage(self):
        """Test total damage is attacks times damage per attack."""
        assert TargetedAttack(4, 25, 1).sum_damage() == 100

    def test_zero_damage_rejected(self):
        """Test attacks must deal damage."""
        with pytest.raises(DamageError, match="Invalid damage_per_attack"):
            TargetedAttack(1, 0)

    def test_negative_attacks_rejected(self):
        """Test the attack count cannot be negative."""
        with pytest.raises(AttacksError, match="Invalid parallel_attacks"):
            TargetedAttack(-1, 10)

    def test_zero_attacks_allowed(self):
        """Test spent descriptors with no attacks are valid."""
        assert TargetedAttack(0, 10).sum_damage() == 0

    def test_valid_target(self):
        """Test targets smaller than the smallest target are excluded."""
        attack = TargetedAttack(1, 10, smallest_target=2)
        assert attack.valid_target(2)
        assert attack.valid_target(5)
        assert not attack.valid_target(1)

    def test_merge_same_bucket(self):
        """Test merging sums attacks of the same target and damage."""
        attack = TargetedAttack(2, 10, 1)
        assert attack.merge(TargetedAttack(3, 10, 1)) is None
        assert attack.parallel_attacks == 5

    def test_merge_different_damage(self):
        """Test attacks with different damage are not merged."""
        attack = TargetedAttack(2, 10, 1)
        other = TargetedAttack(3, 20, 1)
        assert attack.merge(other) is other
        assert attack.parallel_attacks == 2


class TestReducedAttacksConstruction:
    """Test pool ordering and deduplication."""

    def test_sorted_by_target_then_damage(self):
        """Test entries are ordered by smallest target, then damage."""
        pool = ReducedAttacks(
            [TargetedAttack(1, 50, 2), TargetedAttack(1, 10, 2), TargetedAttack(1, 99, 0)]
        )
        assert [(a.smallest_target, a.damage_per_attack) for a in pool] == [
            (0, 99),
            (2, 10),
            (2, 50),
        ]

    def test_same_bucket_merged(self):
        """Test entries sharing target and damage collapse into one."""
        pool = ReducedAttacks([TargetedAttack(2, 10, 1), TargetedAttack(3, 10, 1)])
        assert list(pool) == [TargetedAttack(5, 10, 1)]

    def test_same_target_different_damage_kept_apart(self):
        """Test entries with the same target but different damage stay separate."""
        pool = ReducedAttacks([TargetedAttack(2, 10, 1), TargetedAttack(3, 20, 1)])
        assert len(pool) == 2

    def test_shuffled_and_split_input_builds_same_pool(self):
        """Test construction ignores input order and bucket splitting."""
        attacks = [
            TargetedAttack(6, 10, 0),
            TargetedAttack(2, 40, 0),
            TargetedAttack(4, 25, 1),
            TargetedAttack(1, 500, 3),
            TargetedAttack(8, 25, 2),
        ]
        split = [
            TargetedAttack(2, 10, 0),
            TargetedAttack(4, 10, 0),
            TargetedAttack(1, 40, 0),
            TargetedAttack(1, 40, 0),
            TargetedAttack(4, 25, 1),
            TargetedAttack(1, 500, 3),
            TargetedAttack(3, 25, 2),
            TargetedAttack(5, 25, 2),
        ]
        random.Random(7).shuffle(split)
        assert ReducedAttacks(attacks) == ReducedAttacks(split)

    def test_input_not_aliased(self):
        """Test the pool copies the descriptors it is built from."""
        attack = TargetedAttack(2, 10, 1)
        pool = ReducedAttacks([attack])
        next(iter(pool)).parallel_attacks = 0
        assert attack.parallel_attacks == 2


class TestReducedAttacksInsertion:
    """Test incremental insertion."""

    def test_add_into_existing_bucket(self):
        """Test an attack matching a bucket adds to its count."""
        pool = ReducedAttacks([TargetedAttack(2, 10, 1), TargetedAttack(1, 30, 1)])
        pool.add_attack(TargetedAttack(5, 10, 1))
        assert list(pool) == [TargetedAttack(7, 10, 1), TargetedAttack(1, 30, 1)]

    def test_add_new_bucket_in_order(self):
        """Test a new bucket is inserted in sorted position."""
        pool = ReducedAttacks([TargetedAttack(1, 10, 0), TargetedAttack(1, 10, 3)])
        pool.add_attack(TargetedAttack(2, 20, 1))
        assert [a.smallest_target for a in pool] == [0, 1, 3]

    def test_add_at_ends(self):
        """Test insertion before the first and after the last entry."""
        pool = ReducedAttacks([TargetedAttack(1, 10, 2)])
        pool.add_attack(TargetedAttack(1, 10, 5))
        pool.add_attack(TargetedAttack(1, 10, 0))
        assert [a.smallest_target for a in pool] == [0, 2, 5]

    def test_incremental_matches_bulk(self):
        """Test inserting one by one builds the same pool as bulk construction."""
        attacks = [
            TargetedAttack(3, 15, 1),
            TargetedAttack(1, 5, 0),
            TargetedAttack(2, 15, 1),
            TargetedAttack(4, 40, 1),
            TargetedAttack(1, 5, 0),
        ]
        pool = ReducedAttacks()
        pool.add_attacks(attacks)
        assert pool == ReducedAttacks(attacks)

    def test_added_attack_not_aliased(self):
        """Test insertion copies the new descriptor."""
        attack = TargetedAttack(2, 10, 1)
        pool = ReducedAttacks()
        pool.add_attack(attack)
        pool.add_attack(TargetedAttack(1, 10, 1))
        assert attack.parallel_attacks == 2

    def test_extend(self):
        """Test adding every entry of another pool."""
        pool = ReducedAttacks([TargetedAttack(1, 10, 0)])
        pool.extend(ReducedAttacks([TargetedAttack(2, 10, 0), TargetedAttack(1, 20, 0)]))
        assert list(pool) == [TargetedAttack(3, 10, 0), TargetedAttack(1, 20, 0)]


class TestReducedAttacksConsumption:
    """Test pools being used up."""

    def test_clear_used_attacks(self):
        """Test spent entries are removed."""
        pool = ReducedAttacks([TargetedAttack(0, 10, 0), TargetedAttack(2, 10, 1)])
        pool.clear_used_attacks()
        assert list(pool) == [TargetedAttack(2, 10, 1)]

    def test_eligible_filters_size_and_spent(self):
        """Test eligible entries are live and able to hit the size class."""
        pool = ReducedAttacks(
            [TargetedAttack(0, 10, 0), TargetedAttack(2, 10, 1), TargetedAttack(2, 10, 4)]
        )
        assert list(pool.eligible(2)) == [TargetedAttack(2, 10, 1)]

    def test_eligible_yields_references(self):
        """Test consuming an eligible entry changes the pool."""
        pool = ReducedAttacks([TargetedAttack(2, 10, 0)])
        for attack in pool.eligible(1):
            attack.parallel_attacks = 0
        assert pool.is_exhausted()

    def test_total_damage(self):
        """Test total damage sums every entry."""
        pool = ReducedAttacks([TargetedAttack(2, 10, 0), TargetedAttack(3, 7, 2)])
        assert pool.total_damage() == 41

    def test_empty_pool_is_exhausted(self):
        """Test an empty pool has nothing left."""
        assert ReducedAttacks().is_exhausted()

    def test_scaled(self):
        """Test scaling multiplies every attack count."""
        pool = ReducedAttacks([TargetedAttack(2, 10, 0), TargetedAttack(1, 7, 2)])
        scaled = pool.scaled(5)
        assert list(scaled) == [TargetedAttack(10, 10, 0), TargetedAttack(5, 7, 2)]
        assert list(pool) == [TargetedAttack(2, 10, 0), TargetedAttack(1, 7, 2)]

    def test_scaled_negative(self):
        """Test a negative scale factor is rejected."""
        with pytest.raises(ValueError, match="Invalid scale factor"):
            ReducedAttacks().scaled(-1)

    def test_copy_is_independent(self):
        """Test copies do not share descriptors."""
        pool = ReducedAttacks([TargetedAttack(2, 10, 0)])
        clone = pool.copy()
        next(iter(clone)).parallel_attacks = 0
        assert pool.total_damage() == 20
