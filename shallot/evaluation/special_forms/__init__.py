"""Registry of special forms for the Shallot evaluator.

Maps Symbols to handler functions that implement non-standard evaluation rules.
Each handler receives the raw (unevaluated) tail of the form, the current
environment and the evaluator, and decides for itself what to evaluate.
"""

from shallot.types.symbol import DO, DOT, QUOTE, Symbol
from shallot.evaluation.special_forms.quote_form import quote_form
from shallot.evaluation.special_forms.if_form import if_form
from shallot.evaluation.special_forms.logic_form import and_form, or_form
from shallot.evaluation.special_forms.do_form import do_form
from shallot.evaluation.special_forms.define_form import defun_form, def_form
from shallot.evaluation.special_forms.lambda_form import fun_form
from shallot.evaluation.special_forms.assign_form import assign_form
from shallot.evaluation.special_forms.member_form import member_form
from shallot.evaluation.special_forms.struct_form import struct_form
from shallot.evaluation.special_forms.module_form import module_form

SPECIAL_FORMS = {
    QUOTE: quote_form,
    Symbol("if"): if_form,
    Symbol("and"): and_form,
    Symbol("or"): or_form,
    DO: do_form,
    Symbol("defun"): defun_form,
    Symbol("def"): def_form,
    Symbol("fun"): fun_form,
    Symbol("="): assign_form,
    DOT: member_form,
    Symbol("struct"): struct_form,
    Symbol("module"): module_form,
}
