"""Built-in MAP reference tables.

PERCENTILE_RIT_NORMS maps percentile -> grade -> RIT score (grade 0 is
kindergarten). The 50th, 73rd and 90th rows for grades 1-12 are the published
anchor values used on parent charts. Every other row, and the kindergarten
column, is fitted to a normal curve around those anchors and is not published
NWEA data; replace it with official norms through MAPSCORE_NORMS_FILE before
quoting it to families. RIT rises strictly with percentile inside every grade.

RIT_GRADE_EQUIVALENTS maps a RIT score to its R50 grade equivalent (the grade
at which a student with that score knows half of the curriculum). Scores
between keys are interpolated by the engine; scores outside the sampled range
take the nearest endpoint value.

These dictionaries are the defaults. A YAML file named by MAPSCORE_NORMS_FILE
replaces them wholesale; see scripts/import_norms.py.
"""

PERCENTILE_RIT_NORMS = {
    1: {0: 129, 1: 145, 2: 156, 3: 168, 4: 177, 5: 181, 6: 183, 7: 183, 8: 183, 9: 183, 10: 181, 11: 183, 12: 176},
    5: {0: 138, 1: 154, 2: 166, 3: 178, 4: 187, 5: 192, 6: 195, 7: 196, 8: 197, 9: 197, 10: 196, 11: 198, 12: 193},
    10: {0: 143, 1: 159, 2: 171, 3: 183, 4: 192, 5: 198, 6: 201, 7: 203, 8: 204, 9: 204, 10: 204, 11: 206, 12: 202},
    15: {0: 146, 1: 162, 2: 174, 3: 186, 4: 196, 5: 202, 6: 205, 7: 208, 8: 209, 9: 209, 10: 209, 11: 211, 12: 208},
    20: {0: 149, 1: 165, 2: 177, 3: 189, 4: 199, 5: 205, 6: 209, 7: 211, 8: 213, 9: 213, 10: 214, 11: 216, 12: 213},
    25: {0: 151, 1: 167, 2: 180, 3: 192, 4: 201, 5: 208, 6: 211, 7: 214, 8: 216, 9: 216, 10: 217, 11: 219, 12: 217},
    30: {0: 153, 1: 169, 2: 182, 3: 194, 4: 203, 5: 210, 6: 214, 7: 217, 8: 219, 9: 219, 10: 221, 11: 223, 12: 221},
    35: {0: 155, 1: 171, 2: 184, 3: 196, 4: 205, 5: 213, 6: 216, 7: 220, 8: 222, 9: 222, 10: 224, 11: 226, 12: 224},
    40: {0: 157, 1: 173, 2: 185, 3: 197, 4: 207, 5: 215, 6: 219, 7: 222, 8: 225, 9: 225, 10: 226, 11: 228, 12: 228},
    45: {0: 158, 1: 174, 2: 187, 3: 199, 4: 209, 5: 217, 6: 221, 7: 225, 8: 227, 9: 227, 10: 229, 11: 231, 12: 231},
    50: {0: 160, 1: 176, 2: 189, 3: 201, 4: 211, 5: 219, 6: 223, 7: 227, 8: 230, 9: 230, 10: 232, 11: 234, 12: 234},
    55: {0: 162, 1: 178, 2: 191, 3: 203, 4: 213, 5: 221, 6: 225, 7: 229, 8: 233, 9: 233, 10: 235, 11: 237, 12: 237},
    60: {0: 163, 1: 179, 2: 193, 3: 205, 4: 215, 5: 223, 6: 227, 7: 232, 8: 235, 9: 235, 10: 238, 11: 240, 12: 240},
    65: {0: 165, 1: 181, 2: 194, 3: 206, 4: 217, 5: 225, 6: 230, 7: 234, 8: 238, 9: 238, 10: 240, 11: 242, 12: 244},
    73: {0: 168, 1: 184, 2: 198, 3: 210, 4: 220, 5: 229, 6: 234, 7: 238, 8: 243, 9: 243, 10: 245, 11: 248, 12: 249},
    80: {0: 171, 1: 187, 2: 201, 3: 213, 4: 223, 5: 233, 6: 237, 7: 243, 8: 247, 9: 247, 10: 250, 11: 252, 12: 255},
    85: {0: 174, 1: 190, 2: 204, 3: 216, 4: 226, 5: 236, 6: 241, 7: 246, 8: 251, 9: 251, 10: 255, 11: 257, 12: 260},
    90: {0: 177, 1: 193, 2: 207, 3: 219, 4: 230, 5: 240, 6: 245, 7: 251, 8: 256, 9: 256, 10: 260, 11: 262, 12: 266},
    95: {0: 182, 1: 198, 2: 212, 3: 224, 4: 235, 5: 246, 6: 251, 7: 258, 8: 263, 9: 263, 10: 268, 11: 270, 12: 275},
    99: {0: 191, 1: 207, 2: 222, 3: 234, 4: 245, 5: 257, 6: 263, 7: 271, 8: 277, 9: 277, 10: 283, 11: 285, 12: 292},
}

RIT_GRADE_EQUIVALENTS = {
    187: 3.0, 189: 3.2, 193: 3.5, 196: 3.7, 199: 3.9, 200: 4.0, 203: 4.2,
    205: 4.4, 209: 4.7, 211: 4.9, 213: 5.0, 215: 5.2, 217: 5.4, 219: 5.5,
    221: 5.7, 223: 5.9, 225: 6.0, 227: 6.2, 229: 6.4, 231: 6.5, 233: 6.7,
    235: 6.9, 237: 7.1, 240: 7.4, 241: 7.5, 243: 7.6, 245: 7.8, 247: 8.0,
    249: 8.2, 251: 8.4, 253: 8.6, 255: 8.8, 257: 9.0, 259: 9.2, 261: 9.3,
    263: 9.5, 265: 9.7, 267: 9.9, 269: 10.1, 271: 10.2, 273: 10.4, 275: 10.5,
    277: 10.6, 279: 10.7, 281: 10.8, 283: 10.9, 285: 11.0,
}
