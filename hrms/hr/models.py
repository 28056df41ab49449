"""
HR entity models backing the report builder data sources.

Every model is tenant scoped through ``TenantScopedModel``. Field names are
the snake_case form of the report field identifiers (``joiningDate`` is
``joining_date``), which is what the path resolver relies on.
"""

from django.conf import settings
from django.db import models

from ..multitenancy.models import TenantScopedModel
from . import choices


class NamedTenantEntity(TenantScopedModel):
    name = models.CharField(max_length=150)

    class Meta:
        abstract = True
        ordering = ["name"]

    def __str__(self):
        return self.name


class Department(NamedTenantEntity):
    class Meta(NamedTenantEntity.Meta):
        app_label = "hrms"


class Designation(NamedTenantEntity):
    class Meta(NamedTenantEntity.Meta):
        app_label = "hrms"


class Location(NamedTenantEntity):
    class Meta(NamedTenantEntity.Meta):
        app_label = "hrms"


class Employee(TenantScopedModel):
    """Employee profile; also the identity used to scope report access."""

    account = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="employee_profile",
    )
    role = models.CharField(
        max_length=20,
        choices=choices.EmployeeRole.choices,
        default=choices.EmployeeRole.EMPLOYEE,
    )
    employee_code = models.CharField(max_length=40)
    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100, blank=True)
    email = models.EmailField(blank=True)
    phone = models.CharField(max_length=30, blank=True)
    gender = models.CharField(
        max_length=10, choices=choices.Gender.choices, blank=True
    )
    date_of_birth = models.DateField(null=True, blank=True)
    joining_date = models.DateField(null=True, blank=True)
    exit_date = models.DateField(null=True, blank=True)
    status = models.CharField(
        max_length=20,
        choices=choices.EmployeeStatus.choices,
        default=choices.EmployeeStatus.ACTIVE,
    )
    employment_type = models.CharField(
        max_length=20,
        choices=choices.EmploymentType.choices,
        default=choices.EmploymentType.FULL_TIME,
    )
    is_active = models.BooleanField(default=True)
    department = models.ForeignKey(
        Department, on_delete=models.SET_NULL, null=True, blank=True,
        related_name="employees",
    )
    designation = models.ForeignKey(
        Designation, on_delete=models.SET_NULL, null=True, blank=True,
        related_name="employees",
    )
    location = models.ForeignKey(
        Location, on_delete=models.SET_NULL, null=True, blank=True,
        related_name="employees",
    )
    reporting_manager = models.ForeignKey(
        "self", on_delete=models.SET_NULL, null=True, blank=True,
        related_name="direct_reports",
    )
    permanent_address = models.TextField(blank=True)
    current_address = models.TextField(blank=True)
    bank_name = models.CharField(max_length=150, blank=True)
    bank_account_number = models.CharField(max_length=40, blank=True)
    ifsc_code = models.CharField(max_length=20, blank=True)
    pan_number = models.CharField(max_length=20, blank=True)
    aadhaar_number = models.CharField(max_length=20, blank=True)
    uan_number = models.CharField(max_length=20, blank=True)
    pf_number = models.CharField(max_length=30, blank=True)
    esi_number = models.CharField(max_length=30, blank=True)

    class Meta:
        app_label = "hrms"
        constraints = [
            models.UniqueConstraint(
                fields=["tenant", "employee_code"],
                name="hrms_employee_code_per_tenant",
            )
        ]

    def __str__(self):
        return f"{self.first_name} {self.last_name}".strip()


class Attendance(TenantScopedModel):
    user = models.ForeignKey(
        Employee, on_delete=models.CASCADE, related_name="attendance_records"
    )
    date = models.DateField()
    status = models.CharField(
        max_length=20,
        choices=choices.AttendanceStatus.choices,
        default=choices.AttendanceStatus.PRESENT,
    )
    check_in = models.DateTimeField(null=True, blank=True)
    check_out = models.DateTimeField(null=True, blank=True)
    total_hours = models.DecimalField(
        max_digits=5, decimal_places=2, null=True, blank=True
    )
    overtime_hours = models.DecimalField(
        max_digits=5, decimal_places=2, null=True, blank=True
    )
    is_late = models.BooleanField(default=False)
    is_early_leave = models.BooleanField(default=False)
    notes = models.TextField(blank=True)

    class Meta:
        app_label = "hrms"


class LeaveType(NamedTenantEntity):
    class Meta(NamedTenantEntity.Meta):
        app_label = "hrms"


class LeaveRequest(TenantScopedModel):
    user = models.ForeignKey(
        Employee, on_delete=models.CASCADE, related_name="leave_requests"
    )
    leave_type = models.ForeignKey(
        LeaveType, on_delete=models.PROTECT, related_name="requests"
    )
    from_date = models.DateField()
    to_date = models.DateField()
    total_days = models.DecimalField(max_digits=5, decimal_places=1, default=0)
    status = models.CharField(
        max_length=20,
        choices=choices.LeaveStatus.choices,
        default=choices.LeaveStatus.PENDING,
    )
    reason = models.TextField(blank=True)
    approver = models.ForeignKey(
        Employee, on_delete=models.SET_NULL, null=True, blank=True,
        related_name="approved_leave_requests",
    )
    approved_at = models.DateTimeField(null=True, blank=True)
    rejection_reason = models.TextField(blank=True)

    class Meta:
        app_label = "hrms"


class Payslip(TenantScopedModel):
    user = models.ForeignKey(
        Employee, on_delete=models.CASCADE, related_name="payslips"
    )
    month = models.PositiveSmallIntegerField()
    year = models.PositiveSmallIntegerField()
    basic_salary = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    gross_salary = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    total_earnings = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    total_deductions = models.DecimalField(
        max_digits=12, decimal_places=2, default=0
    )
    net_salary = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    paid_days = models.DecimalField(max_digits=5, decimal_places=1, default=0)
    lop_days = models.DecimalField(max_digits=5, decimal_places=1, default=0)
    status = models.CharField(
        max_length=20,
        choices=choices.PayslipStatus.choices,
        default=choices.PayslipStatus.DRAFT,
    )
    payment_date = models.DateField(null=True, blank=True)
    payment_mode = models.CharField(max_length=40, blank=True)
    transaction_ref = models.CharField(max_length=80, blank=True)

    class Meta:
        app_label = "hrms"


class Goal(TenantScopedModel):
    title = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    owner = models.ForeignKey(
        Employee, on_delete=models.CASCADE, related_name="goals"
    )
    type = models.CharField(
        max_length=20,
        choices=choices.GoalType.choices,
        default=choices.GoalType.INDIVIDUAL,
    )
    category = models.CharField(
        max_length=20,
        choices=choices.GoalCategory.choices,
        default=choices.GoalCategory.BUSINESS,
    )
    status = models.CharField(
        max_length=20,
        choices=choices.GoalStatus.choices,
        default=choices.GoalStatus.NOT_STARTED,
    )
    priority = models.CharField(
        max_length=20,
        choices=choices.Priority.choices,
        default=choices.Priority.MEDIUM,
    )
    progress = models.DecimalField(max_digits=5, decimal_places=2, default=0)
    start_date = models.DateField(null=True, blank=True)
    end_date = models.DateField(null=True, blank=True)
    target_value = models.DecimalField(
        max_digits=14, decimal_places=2, null=True, blank=True
    )
    current_value = models.DecimalField(
        max_digits=14, decimal_places=2, null=True, blank=True
    )
    unit = models.CharField(max_length=40, blank=True)

    class Meta:
        app_label = "hrms"


class ReviewCycle(NamedTenantEntity):
    class Meta(NamedTenantEntity.Meta):
        app_label = "hrms"


class PerformanceReview(TenantScopedModel):
    employee = models.ForeignKey(
        Employee, on_delete=models.CASCADE, related_name="performance_reviews"
    )
    review_cycle = models.ForeignKey(
        ReviewCycle, on_delete=models.CASCADE, related_name="reviews"
    )
    status = models.CharField(
        max_length=20,
        choices=choices.ReviewStatus.choices,
        default=choices.ReviewStatus.PENDING,
    )
    self_rating = models.DecimalField(
        max_digits=3, decimal_places=1, null=True, blank=True
    )
    manager_rating = models.DecimalField(
        max_digits=3, decimal_places=1, null=True, blank=True
    )
    final_rating = models.DecimalField(
        max_digits=3, decimal_places=1, null=True, blank=True
    )
    self_submitted_at = models.DateTimeField(null=True, blank=True)
    manager_submitted_at = models.DateTimeField(null=True, blank=True)
    completed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        app_label = "hrms"


class TrainingProgram(TenantScopedModel):
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    type = models.CharField(
        max_length=20,
        choices=choices.TrainingType.choices,
        default=choices.TrainingType.ONLINE,
    )
    status = models.CharField(
        max_length=20,
        choices=choices.TrainingStatus.choices,
        default=choices.TrainingStatus.PLANNED,
    )
    start_date = models.DateField(null=True, blank=True)
    end_date = models.DateField(null=True, blank=True)
    trainer = models.CharField(max_length=150, blank=True)
    venue = models.CharField(max_length=200, blank=True)
    capacity = models.PositiveIntegerField(null=True, blank=True)
    cost = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    enrollment_count = models.PositiveIntegerField(default=0)

    class Meta:
        app_label = "hrms"


class ExpenseCategory(NamedTenantEntity):
    class Meta(NamedTenantEntity.Meta):
        app_label = "hrms"


class ExpenseClaim(TenantScopedModel):
    user = models.ForeignKey(
        Employee, on_delete=models.CASCADE, related_name="expense_claims"
    )
    category = models.ForeignKey(
        ExpenseCategory, on_delete=models.PROTECT, related_name="claims"
    )
    title = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    expense_date = models.DateField()
    status = models.CharField(
        max_length=20,
        choices=choices.ExpenseStatus.choices,
        default=choices.ExpenseStatus.DRAFT,
    )
    approved_amount = models.DecimalField(
        max_digits=12, decimal_places=2, null=True, blank=True
    )
    reimbursed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        app_label = "hrms"


class AssetCategory(NamedTenantEntity):
    class Meta(NamedTenantEntity.Meta):
        app_label = "hrms"


class Asset(TenantScopedModel):
    name = models.CharField(max_length=200)
    category = models.ForeignKey(
        AssetCategory, on_delete=models.PROTECT, related_name="assets"
    )
    serial_number = models.CharField(max_length=100, blank=True)
    asset_tag = models.CharField(max_length=60, blank=True)
    status = models.CharField(
        max_length=20,
        choices=choices.AssetStatus.choices,
        default=choices.AssetStatus.AVAILABLE,
    )
    condition = models.CharField(
        max_length=20,
        choices=choices.AssetCondition.choices,
        default=choices.AssetCondition.NEW,
    )
    purchase_date = models.DateField(null=True, blank=True)
    purchase_cost = models.DecimalField(
        max_digits=12, decimal_places=2, null=True, blank=True
    )
    current_value = models.DecimalField(
        max_digits=12, decimal_places=2, null=True, blank=True
    )
    warranty_expiry = models.DateField(null=True, blank=True)
    assignee = models.ForeignKey(
        Employee, on_delete=models.SET_NULL, null=True, blank=True,
        related_name="assigned_assets",
    )

    class Meta:
        app_label = "hrms"


class JobPosting(TenantScopedModel):
    title = models.CharField(max_length=200)
    department = models.ForeignKey(
        Department, on_delete=models.SET_NULL, null=True, blank=True,
        related_name="job_postings",
    )
    status = models.CharField(
        max_length=20,
        choices=choices.JobStatus.choices,
        default=choices.JobStatus.DRAFT,
    )

    class Meta:
        app_label = "hrms"


class JobApplication(TenantScopedModel):
    job = models.ForeignKey(
        JobPosting, on_delete=models.CASCADE, related_name="applications"
    )
    candidate_name = models.CharField(max_length=200)
    candidate_email = models.EmailField(blank=True)
    candidate_phone = models.CharField(max_length=30, blank=True)
    source = models.CharField(max_length=80, blank=True)
    stage = models.CharField(
        max_length=20,
        choices=choices.ApplicationStage.choices,
        default=choices.ApplicationStage.NEW,
    )
    rating = models.DecimalField(max_digits=3, decimal_places=1, null=True, blank=True)
    current_salary = models.DecimalField(
        max_digits=12, decimal_places=2, null=True, blank=True
    )
    expected_salary = models.DecimalField(
        max_digits=12, decimal_places=2, null=True, blank=True
    )
    applied_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        app_label = "hrms"
