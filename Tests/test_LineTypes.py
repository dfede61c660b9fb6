# Copyright 2019 by Frank Buermann.  All rights reserved.
#
# This code is part of the gbjson distribution and governed by its
# license.  Please see the LICENSE file that should have been included
# as part of this package.
"""Tests for the GenBank line classifiers."""

import unittest

from GbJson import LineTypes


class LocusLineTests(unittest.TestCase):
    def test_locus(self):
        self.assertTrue(LineTypes.is_locus("LOCUS       test"))
        self.assertTrue(
            LineTypes.is_locus(
                "LOCUS       SCU49845     5028 bp    DNA             PLN       21-JUN-1999"
            )
        )

    def test_locus_name_column(self):
        """The locus name must start in column 12."""
        self.assertFalse(LineTypes.is_locus("LOCUS   test  "))
        self.assertFalse(LineTypes.is_locus("LOCUS        test"))
        self.assertFalse(LineTypes.is_locus("LOCUS"))

    def test_end(self):
        self.assertTrue(LineTypes.is_end("//"))
        self.assertTrue(LineTypes.is_end("//  "))
        self.assertFalse(LineTypes.is_end("/"))
        self.assertFalse(LineTypes.is_end(""))


class KeywordLineTests(unittest.TestCase):
    def test_keyword(self):
        self.assertTrue(LineTypes.is_keyword("DEFINITION  Homo sapiens"))
        self.assertTrue(LineTypes.is_keyword("KEYWORDS    ."))
        self.assertFalse(LineTypes.is_keyword("KEYWORDS"))
        self.assertFalse(LineTypes.is_keyword("  ORGANISM  Homo sapiens"))
        self.assertFalse(LineTypes.is_keyword("1 DEFINITION Homo"))

    def test_subkeyword(self):
        self.assertTrue(LineTypes.is_subkeyword("  ORGANISM  Homo sapiens"))
        self.assertTrue(LineTypes.is_subkeyword("  AB"))
        self.assertFalse(LineTypes.is_subkeyword("   PUBMED   7871890"))
        self.assertFalse(LineTypes.is_subkeyword("DEFINITION  Homo sapiens"))
        self.assertFalse(LineTypes.is_subkeyword("  "))

    def test_subsubkeyword(self):
        self.assertTrue(LineTypes.is_subsubkeyword("   PUBMED   7871890"))
        self.assertFalse(LineTypes.is_subsubkeyword("  ORGANISM  Homo sapiens"))
        self.assertFalse(LineTypes.is_subsubkeyword("    X"))
        self.assertFalse(LineTypes.is_subsubkeyword("   "))

    def test_keyword_levels(self):
        self.assertEqual(
            LineTypes.KEYWORD_LEVELS,
            (LineTypes.is_keyword, LineTypes.is_subkeyword, LineTypes.is_subsubkeyword),
        )
        self.assertEqual(LineTypes.MAX_KEYWORD_LEVEL, 2)

    def test_continuation(self):
        self.assertTrue(LineTypes.is_continuation("            (AXL2) and Rev7p"))
        self.assertTrue(LineTypes.is_continuation(" " * 11))
        self.assertTrue(LineTypes.is_continuation(" " * 21 + "/gene=\"AXL2\""))
        self.assertFalse(LineTypes.is_continuation(" " * 10))
        self.assertFalse(LineTypes.is_continuation("     gene            <687..>3158"))


class FeatureLineTests(unittest.TestCase):
    def test_feature_header(self):
        self.assertTrue(
            LineTypes.is_feature_header("FEATURES             Location/Qualifiers")
        )
        self.assertTrue(LineTypes.is_feature_header("FEATURES"))
        self.assertFalse(LineTypes.is_feature_header("FEATURE"))

    def test_feature(self):
        self.assertTrue(LineTypes.is_feature("     gene            <687..>3158"))
        self.assertTrue(LineTypes.is_feature("     CDS"))
        self.assertFalse(LineTypes.is_feature("      gene           <687..>3158"))
        self.assertFalse(LineTypes.is_feature("    gene             <687..>3158"))
        self.assertFalse(LineTypes.is_feature("     "))

    def test_qualifier(self):
        """Qualifiers are checked on the text after column 21."""
        line = " " * 21 + "/gene=\"AXL2\""
        back = line[LineTypes.FEATURE_QUALIFIER_INDENT :]
        self.assertTrue(LineTypes.is_qualifier(back))
        self.assertFalse(LineTypes.is_qualifier(line))
        self.assertFalse(LineTypes.is_qualifier("70..>90)"))
        self.assertFalse(LineTypes.is_qualifier(""))


class FooterLineTests(unittest.TestCase):
    def test_origin_and_contig(self):
        self.assertTrue(LineTypes.is_origin("ORIGIN"))
        self.assertTrue(LineTypes.is_origin("ORIGIN      "))
        self.assertFalse(LineTypes.is_origin("ORIGI"))
        self.assertTrue(LineTypes.is_contig("CONTIG      join(gap(100))"))
        self.assertFalse(LineTypes.is_contig("CONTI"))

    def test_sequence(self):
        self.assertTrue(
            LineTypes.is_sequence(
                "        1 gatcctccat atacaacggt atctccacct caggtttaga tctcaacaac ggaaccattg"
            )
        )
        self.assertTrue(LineTypes.is_sequence("       61 ccgacatgag"))
        self.assertTrue(LineTypes.is_sequence("   123061 c"))

    def test_sequence_number_field(self):
        """The coordinate field must be numeric."""
        self.assertFalse(LineTypes.is_sequence("       6a ccgacatgag"))
        self.assertFalse(LineTypes.is_sequence("          ccgacatgag"))
        self.assertFalse(LineTypes.is_sequence("ORIGIN    ccgacatgag"))

    def test_sequence_data_column(self):
        """Column 9 must be white space and column 10 must not be."""
        self.assertFalse(LineTypes.is_sequence("        1  "))
        self.assertFalse(LineTypes.is_sequence("        1  gatcctccat"))
        self.assertFalse(LineTypes.is_sequence("       611gatcctccat"))
        self.assertFalse(LineTypes.is_sequence("        1 "))
        self.assertFalse(LineTypes.is_sequence(""))


if __name__ == "__main__":
    runner = unittest.TextTestRunner(verbosity=2)
    unittest.main(testRunner=runner)
