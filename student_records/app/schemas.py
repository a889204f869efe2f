from pydantic import BaseModel, ConfigDict, Field


class StudentInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    roll_no: str = Field(alias="rollNo")
    email: str
    phone: str
    department: str
    year: str

    def to_wire(self) -> dict:
        """Request payload with backend field names and no id."""
        return self.model_dump(by_alias=True, exclude={"id"})


class Student(StudentInput):
    id: str
