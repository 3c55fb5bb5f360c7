"""
JLPT Constants - levels, sections, question counts and timing used by the tryout.
"""

LEVELS = ('N5', 'N4', 'N3', 'N2', 'N1')

SECTION_VOCABULARY = 'vocabulary'
SECTION_GRAMMAR_READING = 'grammar_reading'
SECTION_LISTENING = 'listening'

SECTIONS = (SECTION_VOCABULARY, SECTION_GRAMMAR_READING, SECTION_LISTENING)

SECTION_DISPLAY_NAMES = {
    SECTION_VOCABULARY: 'Vocabulary (文字・語彙)',
    SECTION_GRAMMAR_READING: 'Grammar & Reading (文法・読解)',
    SECTION_LISTENING: 'Listening (聴解)',
}

# Question count per mondai, in mondai order.
# N2/N1 put the grammar mondai in the vocabulary (language knowledge) section.
JLPT_MONDAI_STRUCTURE = {
    'N5': {
        SECTION_VOCABULARY: {1: 12, 2: 8, 3: 10, 4: 5},
        SECTION_GRAMMAR_READING: {1: 16, 2: 5, 3: 5, 4: 3, 5: 2, 6: 1},
        SECTION_LISTENING: {1: 7, 2: 6, 3: 5, 4: 6},
    },
    'N4': {
        SECTION_VOCABULARY: {1: 9, 2: 6, 3: 10, 4: 5, 5: 5},
        SECTION_GRAMMAR_READING: {1: 15, 2: 5, 3: 5, 4: 4, 5: 4, 6: 2},
        SECTION_LISTENING: {1: 8, 2: 7, 3: 5, 4: 8},
    },
    'N3': {
        SECTION_VOCABULARY: {1: 8, 2: 6, 3: 11, 4: 5, 5: 5},
        SECTION_GRAMMAR_READING: {1: 13, 2: 5, 3: 5, 4: 4, 5: 6, 6: 4, 7: 2},
        SECTION_LISTENING: {1: 6, 2: 6, 3: 4, 4: 9},
    },
    'N2': {
        SECTION_VOCABULARY: {1: 5, 2: 5, 3: 5, 4: 7, 5: 5, 6: 5, 7: 12, 8: 5, 9: 5},
        SECTION_GRAMMAR_READING: {10: 5, 11: 9, 12: 2, 13: 3, 14: 2},
        SECTION_LISTENING: {1: 5, 2: 6, 3: 5, 4: 12, 5: 4},
    },
    'N1': {
        SECTION_VOCABULARY: {1: 6, 2: 7, 3: 6, 4: 6, 5: 10, 6: 5, 7: 5},
        SECTION_GRAMMAR_READING: {8: 4, 9: 9, 10: 4, 11: 2, 12: 4, 13: 2},
        SECTION_LISTENING: {1: 6, 2: 7, 3: 6, 4: 14, 5: 4},
    },
}

# Section time limits (minutes) shown to the candidate; the server does not enforce them.
JLPT_SECTION_DURATION = {
    'N5': {SECTION_VOCABULARY: 25, SECTION_GRAMMAR_READING: 50, SECTION_LISTENING: 30},
    'N4': {SECTION_VOCABULARY: 30, SECTION_GRAMMAR_READING: 60, SECTION_LISTENING: 35},
    'N3': {SECTION_VOCABULARY: 30, SECTION_GRAMMAR_READING: 70, SECTION_LISTENING: 40},
    'N2': {SECTION_VOCABULARY: 45, SECTION_GRAMMAR_READING: 60, SECTION_LISTENING: 50},
    'N1': {SECTION_VOCABULARY: 50, SECTION_GRAMMAR_READING: 60, SECTION_LISTENING: 60},
}

CHOICE_NUMBERS = (1, 2, 3, 4)


def required_question_count(level, section):
    """Number of questions a full tryout puts in one section of a level."""
    return sum(JLPT_MONDAI_STRUCTURE[level][section].values())


def section_duration_minutes(level, section):
    return JLPT_SECTION_DURATION[level][section]
