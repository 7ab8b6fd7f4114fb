"""Tests for PAM and seed disruption search."""

from autooligo.design.disruption import (
    critical_indices,
    disrupt_site,
    find_pam_silent,
    find_seed_silent,
    overlapping_codons,
    seed_indices,
    silent_alternatives,
    target_disrupts_pam,
)
from autooligo.models.data_classes import Cas9Site
from autooligo.models.enums import RepairStrategy, Strand


# Forward site at 1: spacer 1-20, N at 21, GG at 22-23 inside codon AGG (21-23)
ARM = "AAT" * 7 + "AGG" + "AAT" * 3
SITE = Cas9Site(position=1, sequence=ARM[1:24], strand=Strand.FORWARD)


class TestIndices:
    def test_forward_critical_and_seed(self) -> None:
        assert critical_indices(SITE, 0, len(ARM)) == {22, 23}
        assert seed_indices(SITE, 0, len(ARM)) == set(range(11, 21))

    def test_reverse_offsets(self) -> None:
        site = Cas9Site(position=5, sequence="CC" + "A" * 21, strand=Strand.REVERSE)
        assert critical_indices(site, 0, 40) == {5, 6}
        assert seed_indices(site, 0, 40) == set(range(8, 18))

    def test_indices_outside_arm_dropped(self) -> None:
        assert critical_indices(SITE, 0, 23) == {22}

    def test_codons_follow_gene_frame(self) -> None:
        # Arm starting at gene nt 1: gene codon 21-23 is local 20-22
        assert overlapping_codons(frozenset({21, 22}), 1, 29) == [20]
        # Gene codon 0 starts before the arm and is skipped
        assert overlapping_codons(frozenset({0, 1, 2}), 1, 29) == [2]


class TestSilentAlternatives:
    def test_excludes_self(self) -> None:
        assert list(silent_alternatives("AAT")) == ["AAC"]

    def test_single_codon_amino_acids(self) -> None:
        assert list(silent_alternatives("TGG")) == []
        assert list(silent_alternatives("ATG")) == []

    def test_stop_and_unknown(self) -> None:
        assert list(silent_alternatives("TAA")) == []
        assert list(silent_alternatives("NNN")) == []


class TestPamSilent:
    def test_fewest_changes_wins(self) -> None:
        attempt = find_pam_silent(ARM, SITE, 0)

        assert attempt is not None
        assert attempt.strategy == RepairStrategy.PAM_SILENT
        assert attempt.mutation_count == 1
        assert attempt.sequence == ARM[:21] + "AGA" + ARM[24:]

    def test_arm_offset_keeps_gene_frame(self) -> None:
        arm = ARM[1:]
        attempt = find_pam_silent(arm, SITE, 1)

        assert attempt is not None
        assert attempt.sequence == arm[:20] + "AGA" + arm[23:]

    def test_glycine_pam_cannot_be_silenced(self) -> None:
        # GG at 21-22 inside GGA: every Gly codon starts with GG
        arm = "AAT" * 7 + "GGA" + "AAT" * 3
        site = Cas9Site(position=0, sequence=arm[:23], strand=Strand.FORWARD)
        assert find_pam_silent(arm, site, 0) is None


class TestSeedSilent:
    def test_accumulates_until_threshold(self) -> None:
        # Trp PAM codon 21-23, seed 11-20 covers AAT codons at 9, 12, 15, 18
        arm = "AAT" * 7 + "TGG" + "AAT" * 3
        site = Cas9Site(position=1, sequence=arm[1:24], strand=Strand.FORWARD)

        attempt = find_seed_silent(arm, site, 0, threshold=2)

        assert attempt is not None
        assert attempt.strategy == RepairStrategy.SEED_SILENT
        assert attempt.mutation_count == 2
        assert attempt.sequence[9:15] == "AACAAC"
        assert attempt.sequence[15:] == arm[15:]

    def test_threshold_not_reached(self) -> None:
        arm = "AAT" * 3 + "ATG" * 4 + "TGG" + "AAT" * 3
        site = Cas9Site(position=1, sequence=arm[1:24], strand=Strand.FORWARD)
        assert find_seed_silent(arm, site, 0) is None


class TestDisruptSite:
    def test_target_edit_takes_precedence(self) -> None:
        mutated = ARM[:21] + "CGG" + ARM[24:]
        # Only position 21 (the N) changed: not critical
        assert not target_disrupts_pam(ARM, mutated, SITE, 0)

        mutated = ARM[:21] + "AGT" + ARM[24:]
        assert target_disrupts_pam(ARM, mutated, SITE, 0)
        attempt = disrupt_site(ARM, mutated, SITE, 0)
        assert attempt.strategy == RepairStrategy.PAM_DISRUPTED_BY_TARGET
        assert attempt.mutation_count == 0
        assert attempt.sequence == mutated

    def test_falls_back_to_pam_silent(self) -> None:
        attempt = disrupt_site(ARM, ARM, SITE, 0)
        assert attempt.strategy == RepairStrategy.PAM_SILENT

    def test_no_disruption(self) -> None:
        arm = "AAT" * 3 + "ATG" * 4 + "TGG" + "AAT" * 3
        site = Cas9Site(position=1, sequence=arm[1:24], strand=Strand.FORWARD)
        assert disrupt_site(arm, arm, site, 0) is None
