"""
Enumerated values shared by the HR models and the report field registry.
"""

from django.db import models


class Gender(models.TextChoices):
    MALE = "MALE", "Male"
    FEMALE = "FEMALE", "Female"
    OTHER = "OTHER", "Other"


class EmployeeStatus(models.TextChoices):
    ACTIVE = "ACTIVE", "Active"
    INACTIVE = "INACTIVE", "Inactive"
    ON_NOTICE = "ON_NOTICE", "On notice"
    TERMINATED = "TERMINATED", "Terminated"


class EmploymentType(models.TextChoices):
    FULL_TIME = "FULL_TIME", "Full time"
    PART_TIME = "PART_TIME", "Part time"
    CONTRACT = "CONTRACT", "Contract"
    INTERN = "INTERN", "Intern"
    CONSULTANT = "CONSULTANT", "Consultant"


class EmployeeRole(models.TextChoices):
    ADMIN = "ADMIN", "Admin"
    HR = "HR", "HR"
    MANAGER = "MANAGER", "Manager"
    EMPLOYEE = "EMPLOYEE", "Employee"


class AttendanceStatus(models.TextChoices):
    PRESENT = "PRESENT", "Present"
    ABSENT = "ABSENT", "Absent"
    HALF_DAY = "HALF_DAY", "Half day"
    ON_LEAVE = "ON_LEAVE", "On leave"
    HOLIDAY = "HOLIDAY", "Holiday"
    WEEKEND = "WEEKEND", "Weekend"
    WORK_FROM_HOME = "WORK_FROM_HOME", "Work from home"


class LeaveStatus(models.TextChoices):
    PENDING = "PENDING", "Pending"
    APPROVED = "APPROVED", "Approved"
    REJECTED = "REJECTED", "Rejected"
    CANCELLED = "CANCELLED", "Cancelled"


class PayslipStatus(models.TextChoices):
    DRAFT = "DRAFT", "Draft"
    PROCESSING = "PROCESSING", "Processing"
    GENERATED = "GENERATED", "Generated"
    FINALIZED = "FINALIZED", "Finalized"
    PAID = "PAID", "Paid"


class GoalType(models.TextChoices):
    COMPANY = "COMPANY", "Company"
    TEAM = "TEAM", "Team"
    INDIVIDUAL = "INDIVIDUAL", "Individual"


class GoalCategory(models.TextChoices):
    BUSINESS = "BUSINESS", "Business"
    PERSONAL = "PERSONAL", "Personal"
    DEVELOPMENT = "DEVELOPMENT", "Development"
    PROJECT = "PROJECT", "Project"


class GoalStatus(models.TextChoices):
    NOT_STARTED = "NOT_STARTED", "Not started"
    IN_PROGRESS = "IN_PROGRESS", "In progress"
    COMPLETED = "COMPLETED", "Completed"
    ON_HOLD = "ON_HOLD", "On hold"
    CANCELLED = "CANCELLED", "Cancelled"


class Priority(models.TextChoices):
    LOW = "LOW", "Low"
    MEDIUM = "MEDIUM", "Medium"
    HIGH = "HIGH", "High"
    CRITICAL = "CRITICAL", "Critical"


class ReviewStatus(models.TextChoices):
    PENDING = "PENDING", "Pending"
    SELF_REVIEW = "SELF_REVIEW", "Self review"
    MANAGER_REVIEW = "MANAGER_REVIEW", "Manager review"
    CALIBRATION = "CALIBRATION", "Calibration"
    COMPLETED = "COMPLETED", "Completed"
    CANCELLED = "CANCELLED", "Cancelled"


class TrainingType(models.TextChoices):
    ONLINE = "ONLINE", "Online"
    CLASSROOM = "CLASSROOM", "Classroom"
    WORKSHOP = "WORKSHOP", "Workshop"
    CONFERENCE = "CONFERENCE", "Conference"
    CERTIFICATION = "CERTIFICATION", "Certification"


class TrainingStatus(models.TextChoices):
    PLANNED = "PLANNED", "Planned"
    IN_PROGRESS = "IN_PROGRESS", "In progress"
    COMPLETED = "COMPLETED", "Completed"
    CANCELLED = "CANCELLED", "Cancelled"


class ExpenseStatus(models.TextChoices):
    DRAFT = "DRAFT", "Draft"
    SUBMITTED = "SUBMITTED", "Submitted"
    APPROVED = "APPROVED", "Approved"
    REJECTED = "REJECTED", "Rejected"
    REIMBURSED = "REIMBURSED", "Reimbursed"


class AssetStatus(models.TextChoices):
    AVAILABLE = "AVAILABLE", "Available"
    ASSIGNED = "ASSIGNED", "Assigned"
    MAINTENANCE = "MAINTENANCE", "Maintenance"
    RETIRED = "RETIRED", "Retired"
    LOST = "LOST", "Lost"


class AssetCondition(models.TextChoices):
    NEW = "NEW", "New"
    GOOD = "GOOD", "Good"
    FAIR = "FAIR", "Fair"
    POOR = "POOR", "Poor"
    DAMAGED = "DAMAGED", "Damaged"


class JobStatus(models.TextChoices):
    DRAFT = "DRAFT", "Draft"
    OPEN = "OPEN", "Open"
    ON_HOLD = "ON_HOLD", "On hold"
    CLOSED = "CLOSED", "Closed"
    CANCELLED = "CANCELLED", "Cancelled"


class ApplicationStage(models.TextChoices):
    NEW = "NEW", "New"
    SCREENING = "SCREENING", "Screening"
    INTERVIEW = "INTERVIEW", "Interview"
    EVALUATION = "EVALUATION", "Evaluation"
    OFFER = "OFFER", "Offer"
    HIRED = "HIRED", "Hired"
    REJECTED = "REJECTED", "Rejected"
    WITHDRAWN = "WITHDRAWN", "Withdrawn"
