"""Registry of special forms for the risp evaluator.

Maps SpecialForm tags to handler functions that implement non-standard
evaluation rules. Handlers receive the unevaluated operands and the
Evaluator, and trace failing operand k as child k + 1 of the form.
"""

from risp.types.values import SpecialForm
from risp.evaluation.special_forms.begin_form import begin_form
from risp.evaluation.special_forms.define_form import define_form
from risp.evaluation.special_forms.set_form import set_form
from risp.evaluation.special_forms.lambda_form import lambda_form, macro_form
from risp.evaluation.special_forms.if_form import if_form
from risp.evaluation.special_forms.let_form import let_form
from risp.evaluation.special_forms.quote_forms import quote_form, quasiquote_form

SPECIAL_FORMS = {
    SpecialForm.DEF: define_form,
    SpecialForm.SET: set_form,
    SpecialForm.FN: lambda_form,
    SpecialForm.MACRO: macro_form,
    SpecialForm.IF: if_form,
    SpecialForm.LET: let_form,
    SpecialForm.BEGIN: begin_form,
    SpecialForm.QUOTE: quote_form,
    SpecialForm.QUASIQUOTE: quasiquote_form,
}
